"""Shared fixtures: a tiny asset directory generated with Pillow."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from musclemap.config import RenderConfig
from musclemap.utils.assets import AssetCatalog

SIZE = (8, 8)
WHITE = (255, 255, 255)


def _silhouette(gray: int, alpha: int, columns: range, size=SIZE) -> Image.Image:
    image = Image.new("RGBA", size, (0, 0, 0, 0))
    for x in columns:
        for y in range(size[1]):
            image.putpixel((x, y), (gray, gray, gray, alpha))
    return image


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    root = tmp_path / "images"
    root.mkdir()

    Image.new("RGB", SIZE, WHITE).save(root / "baseImage.png")
    Image.new("RGBA", SIZE, (0, 0, 0, 0)).save(root / "baseImage_transparent.png")

    # Mid grey tints to exactly the requested colour.
    _silhouette(127, 255, range(0, 5)).save(root / "biceps.png")
    # Lighter grey overlapping biceps on columns 3 and 4.
    _silhouette(200, 255, range(3, 8)).save(root / "triceps.png")
    _silhouette(127, 128, range(0, 8)).save(root / "chest.png")
    _silhouette(127, 255, range(0, 4), size=(4, 4)).save(root / "hands.png")
    (root / "forearms.png").write_bytes(b"not a png")
    return root


@pytest.fixture
def catalog(assets_dir: Path) -> AssetCatalog:
    return AssetCatalog.from_directory(assets_dir)


@pytest.fixture
def config(assets_dir: Path) -> RenderConfig:
    return RenderConfig(assets_dir=str(assets_dir))
