"""
Service configuration.

Settings are layered: packaged ``configs/defaults.yaml``, then an optional
YAML file named by ``MUSCLEMAP_CONFIG``, then individual environment
variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .utils.assets import ENV_ASSETS_VAR, AssetCatalog, discover_assets_dir

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
DEFAULTS_PATH = CONFIG_DIR / "defaults.yaml"
ENV_CONFIG_VAR = "MUSCLEMAP_CONFIG"
ENV_LOG_LEVEL_VAR = "MUSCLEMAP_LOG_LEVEL"

LOG = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Top level service configuration."""

    assets_dir: Optional[str] = None
    base_image: str = "baseImage.png"
    base_image_transparent: str = "baseImage_transparent.png"
    primary_color: str = "255,152,0"
    secondary_color: str = "255,211,144"
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RenderConfig":
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            LOG.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in payload.items() if key in known})

    def resolve_assets_dir(self) -> Path:
        if not self.assets_dir:
            return discover_assets_dir(self.base_image)
        return Path(self.assets_dir).expanduser()

    def catalog(self) -> AssetCatalog:
        return AssetCatalog.from_directory(
            self.resolve_assets_dir(),
            base_image=self.base_image,
            base_image_transparent=self.base_image_transparent,
        )


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return payload


def load_config(path: str | Path | None = None) -> RenderConfig:
    """
    Build a :class:`RenderConfig` from defaults, an override file and the
    environment.
    """

    payload: Dict[str, Any] = {}
    if DEFAULTS_PATH.exists():
        payload.update(_read_yaml(DEFAULTS_PATH))

    override = path or os.environ.get(ENV_CONFIG_VAR)
    if override:
        payload.update(_read_yaml(Path(override).expanduser()))

    assets_dir = os.environ.get(ENV_ASSETS_VAR)
    if assets_dir:
        payload["assets_dir"] = assets_dir

    log_level = os.environ.get(ENV_LOG_LEVEL_VAR)
    if log_level:
        payload["log_level"] = log_level

    return RenderConfig.from_mapping(payload)
