"""
Service process entrypoint.

Resolves configuration, initialises logging, and either serves the FastAPI
app with uvicorn (`serve`, the default) or renders a single diagram to disk
(`render`).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from .api.server import create_app
from .compositor import InvalidColor, LayerCompositor, RenderError, RenderRequest
from .config import RenderConfig, load_config
from .utils.logging import configure_logging

LOG = logging.getLogger(__name__)


async def serve(config: RenderConfig, host: str = "127.0.0.1", port: int = 8080) -> None:
    """
    Run the HTTP API inside an asyncio loop.

    Parameters
    ----------
    config:
        Service configuration.
    host, port:
        Bind address for the FastAPI/uvicorn server.
    """

    import uvicorn

    configure_logging(config.log_level)
    catalog = config.catalog()

    @asynccontextmanager
    async def app_lifespan(_app) -> AsyncIterator[None]:
        if catalog.exists:
            LOG.info("Serving muscle assets from %s", catalog.root)
        else:
            LOG.warning("Asset directory %s does not exist; renders will fail", catalog.root)
        try:
            yield
        finally:
            LOG.info("Service shutting down")

    app = create_app(config=config, lifespan=app_lifespan)
    server_config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        log_config=None,
        log_level=config.log_level.lower(),
        reload=False,
    )
    server = uvicorn.Server(config=server_config)
    await server.serve()


def render(config: RenderConfig, args: argparse.Namespace) -> int:
    """
    Render one diagram to ``args.output`` without starting the server.
    """

    configure_logging(config.log_level)
    try:
        request = RenderRequest.from_strings(
            primary_muscles=args.primary,
            secondary_muscles=args.secondary,
            primary_color=args.primary_color or config.primary_color,
            secondary_color=args.secondary_color or config.secondary_color,
            transparent="1" if args.transparent else "0",
        )
    except InvalidColor as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        result = LayerCompositor(config.catalog()).render_sync(request)
    except (RenderError, OSError) as exc:
        LOG.error("Failed to render diagram: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    output = Path(args.output)
    output.write_bytes(result.content)
    print(f"Wrote {len(result.content)} bytes to {output}")
    return 0


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Muscle diagram renderer")
    parser.add_argument("--config", default=None, help="YAML file overriding the default settings")
    parser.add_argument("--assets", default=None, help="directory holding the muscle PNG assets")
    subparsers = parser.add_subparsers(dest="command")
    # Without a subcommand the API server is started.
    parser.set_defaults(command="serve", host="127.0.0.1", port=8080)

    serve_parser = subparsers.add_parser("serve", help="run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="bind host for the API server")
    serve_parser.add_argument("--port", type=int, default=8080, help="bind port for the API server")

    render_parser = subparsers.add_parser("render", help="write a diagram PNG to disk")
    render_parser.add_argument("--primary", default="", help="comma separated primary muscles")
    render_parser.add_argument("--secondary", default="", help="comma separated secondary muscles")
    render_parser.add_argument("--primary-color", default=None, help="R,G,B tint for primary muscles")
    render_parser.add_argument("--secondary-color", default=None, help="R,G,B tint for secondary muscles")
    render_parser.add_argument("--transparent", action="store_true", help="use the transparent base image")
    render_parser.add_argument("--output", default="muscles.png", help="destination PNG path")
    return parser.parse_args(argv)


def run(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    if args.assets:
        config.assets_dir = args.assets

    if args.command == "render":
        return render(config, args)

    try:
        asyncio.run(serve(config=config, host=args.host, port=args.port))
    except KeyboardInterrupt:
        LOG.info("Server interrupted by user.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
