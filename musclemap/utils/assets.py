"""
Asset discovery utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..muscles import MuscleGroup

ENV_ASSETS_VAR = "MUSCLEMAP_ASSETS"
IMAGES_DIRNAME = "images"
BASE_IMAGE = "baseImage.png"
BASE_IMAGE_TRANSPARENT = "baseImage_transparent.png"


def _is_assets_dir(path: Path, base_image: str = BASE_IMAGE) -> bool:
    return (path / base_image).is_file()


def _iter_unique(paths: Iterable[Optional[Path]]) -> Iterable[Path]:
    seen: set[Path] = set()
    for path in paths:
        if path is None:
            continue
        try:
            resolved = path.resolve()
        except FileNotFoundError:
            continue
        if resolved in seen:
            continue
        seen.add(resolved)
        yield resolved


def discover_assets_dir(base_image: str = BASE_IMAGE) -> Path:
    """
    Locate the ``images/`` directory holding the base and muscle PNGs.

    ``MUSCLEMAP_ASSETS`` wins when it points at a usable directory; otherwise
    the package root, the working directory and their parents are searched.
    """

    env_root = os.environ.get(ENV_ASSETS_VAR)
    if env_root:
        candidate = Path(env_root).expanduser()
        if _is_assets_dir(candidate, base_image):
            return candidate.resolve()

    module_path = Path(__file__).resolve()
    package_root = module_path.parent.parent
    cwd = Path.cwd()

    candidates = list(
        _iter_unique(
            [
                package_root,
                cwd,
                *package_root.parents,
                *cwd.parents,
            ]
        )
    )

    for candidate in candidates:
        images_dir = candidate / IMAGES_DIRNAME
        if _is_assets_dir(images_dir, base_image):
            return images_dir

    return package_root.parent / IMAGES_DIRNAME


@dataclass(frozen=True)
class AssetCatalog:
    """
    Read-only view of the on-disk assets, built once per process.

    ``muscles`` maps every :class:`MuscleGroup` to the path its silhouette
    would live at; whether the file exists is checked at lookup time.
    """

    root: Path
    base_image: Path
    base_image_transparent: Path
    muscles: Mapping[MuscleGroup, Path]

    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        *,
        base_image: str = BASE_IMAGE,
        base_image_transparent: str = BASE_IMAGE_TRANSPARENT,
    ) -> "AssetCatalog":
        root_path = Path(root).expanduser().resolve()
        muscles = {muscle: root_path / f"{muscle.value}.png" for muscle in MuscleGroup}
        return cls(
            root=root_path,
            base_image=root_path / base_image,
            base_image_transparent=root_path / base_image_transparent,
            muscles=MappingProxyType(muscles),
        )

    @property
    def exists(self) -> bool:
        return self.root.is_dir()

    def base_for(self, transparent: bool) -> Path:
        return self.base_image_transparent if transparent else self.base_image
