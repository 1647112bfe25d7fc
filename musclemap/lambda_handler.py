"""
Serverless entrypoint (AWS Lambda, Netlify functions).

Mangum translates the platform event into an ASGI request and base64-encodes
the PNG body on the way out.
"""

from __future__ import annotations

from mangum import Mangum

from .api.server import create_app
from .config import load_config
from .utils.logging import configure_logging

config = load_config()
configure_logging(config.log_level)

app = create_app(config=config)
handler = Mangum(app, lifespan="off")
