"""Utility helpers for the service."""

from .assets import AssetCatalog, discover_assets_dir
from .logging import configure_logging

__all__ = ["AssetCatalog", "configure_logging", "discover_assets_dir"]
