"""Tests covering configuration layering and asset discovery."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from musclemap.config import ENV_CONFIG_VAR, ENV_LOG_LEVEL_VAR, RenderConfig, load_config
from musclemap.muscles import MuscleGroup
from musclemap.utils.assets import ENV_ASSETS_VAR, AssetCatalog, discover_assets_dir


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_CONFIG_VAR, ENV_LOG_LEVEL_VAR, ENV_ASSETS_VAR):
        monkeypatch.delenv(name, raising=False)


def test_packaged_defaults() -> None:
    config = load_config()

    assert config.primary_color == "255,152,0"
    assert config.secondary_color == "255,211,144"
    assert config.base_image == "baseImage.png"
    assert config.base_image_transparent == "baseImage_transparent.png"
    assert config.assets_dir is None
    assert config.log_level == "INFO"


def test_override_file_and_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    override = tmp_path / "override.yaml"
    override.write_text('primary_color: "1,2,3"\nlog_level: DEBUG\n', encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG_VAR, str(override))
    monkeypatch.setenv(ENV_LOG_LEVEL_VAR, "WARNING")
    monkeypatch.setenv(ENV_ASSETS_VAR, str(tmp_path))

    config = load_config()

    assert config.primary_color == "1,2,3"
    assert config.secondary_color == "255,211,144"
    assert config.log_level == "WARNING"
    assert config.assets_dir == str(tmp_path)


def test_unknown_keys_are_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="musclemap.config"):
        config = RenderConfig.from_mapping({"primary_color": "9,9,9", "z_index": 3})

    assert config.primary_color == "9,9,9"
    assert "z_index" in caplog.text


def test_non_mapping_config_file_is_rejected(tmp_path: Path) -> None:
    override = tmp_path / "list.yaml"
    override.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(override)


def test_catalog_from_config(assets_dir: Path) -> None:
    catalog = RenderConfig(assets_dir=str(assets_dir)).catalog()

    assert catalog.root == assets_dir.resolve()
    assert catalog.exists
    assert catalog.base_for(False).name == "baseImage.png"
    assert catalog.base_for(True).name == "baseImage_transparent.png"
    assert set(catalog.muscles) == set(MuscleGroup)
    assert catalog.muscles[MuscleGroup.SHOULDERS_FRONT].name == "shoulders_front.png"


def test_catalog_table_is_immutable(assets_dir: Path) -> None:
    catalog = AssetCatalog.from_directory(assets_dir)

    with pytest.raises(TypeError):
        catalog.muscles[MuscleGroup.BICEPS] = assets_dir / "other.png"  # type: ignore[index]


def test_discover_prefers_environment(assets_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_ASSETS_VAR, str(assets_dir))

    assert discover_assets_dir() == assets_dir.resolve()


def test_discover_walks_working_directory(assets_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    nested = assets_dir.parent / "project" / "sub"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    # assets_dir is <tmp>/images, a sibling of <tmp>/project.
    assert discover_assets_dir() == assets_dir.resolve()
