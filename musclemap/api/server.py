"""
FastAPI surface for the muscle diagram renderer.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..compositor import InvalidColor, LayerCompositor
from ..config import RenderConfig, load_config
from ..muscles import MuscleGroup
from . import schemas

RENDER_PATHS = ("/muscle-image", "/.netlify/functions/muscle-image")

LOG = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, details: str) -> JSONResponse:
    body = schemas.ErrorModel(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(
    *,
    config: Optional[RenderConfig] = None,
    compositor: Optional[LayerCompositor] = None,
    lifespan: Optional[Callable[..., object]] = None,
) -> FastAPI:
    render_config = config or load_config()
    layer_compositor = compositor or LayerCompositor(render_config.catalog())
    catalog = layer_compositor.catalog

    app = FastAPI(title="Muscle Diagram API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/healthz", response_model=schemas.HealthModel)
    async def healthz() -> schemas.HealthModel:
        return schemas.HealthModel(status="ok", assets=catalog.exists)

    @app.get("/muscles", response_model=schemas.MuscleCollection)
    async def list_muscles() -> schemas.MuscleCollection:
        validator = layer_compositor.validator
        return schemas.MuscleCollection(
            muscles=[
                schemas.MuscleModel(id=muscle.value, available=validator.has_asset(muscle))
                for muscle in MuscleGroup
            ]
        )

    async def render_muscle_image(
        primary_muscles: str = "",
        secondary_muscles: str = "",
        primary_color: Optional[str] = None,
        secondary_color: Optional[str] = None,
        transparent: str = "0",
    ) -> Response:
        query = schemas.RenderQuery(
            primary_muscles=primary_muscles,
            secondary_muscles=secondary_muscles,
            primary_color=primary_color,
            secondary_color=secondary_color,
            transparent=transparent,
        )
        try:
            request = query.to_request(
                default_primary=render_config.primary_color,
                default_secondary=render_config.secondary_color,
            )
        except InvalidColor as exc:
            LOG.warning("Rejected render request: %s", exc)
            return _error_response(400, "Invalid color.", str(exc))

        try:
            result = await layer_compositor.render(request)
        except Exception as exc:
            LOG.exception("Error generating image")
            return _error_response(500, "Failed to generate image.", str(exc))

        return Response(content=result.content, media_type=result.media_type)

    for path in RENDER_PATHS:
        app.add_api_route(
            path,
            render_muscle_image,
            methods=["GET"],
            response_class=Response,
            responses={200: {"content": {"image/png": {}}}},
        )

    return app
