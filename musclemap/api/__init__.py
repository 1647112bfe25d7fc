"""HTTP surface for the renderer."""

from .server import create_app

__all__ = ["create_app"]
