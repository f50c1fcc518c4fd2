"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from concessions.common.errors import ConfigError
from concessions.common.fs import read_yaml
from concessions.common.schema import validate_app_config, validate_palette_config

# Shipped as package data next to the code.
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


@dataclass(frozen=True)
class ConfigBundle:
    app: dict
    palette: dict
    config_dir: Path = DEFAULT_CONFIG_DIR

    def dataset_source(self, override: str | None = None) -> str:
        """Return the dataset path or URL, resolving relative paths against ``config_dir``."""
        if override:
            return override
        source = self.app["dataset"]["source"]
        if not source:
            raise ConfigError("No dataset source configured: set dataset.source or pass --data")
        if source.startswith(("http://", "https://")) or Path(source).is_absolute():
            return source
        return str(self.config_dir / source)


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_dir: Path | None) -> dict:
    base = read_yaml(path)
    if overlay_dir is None:
        return base
    overlay_path = overlay_dir / path.name
    if not overlay_path.exists():
        return base
    return _deep_merge(base, read_yaml(overlay_path))


def load_all_configs(
    config_dir: Path = DEFAULT_CONFIG_DIR,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    app = validate_app_config(
        _load_yaml_with_overlay(config_dir / "app.yml", overlay_config_dir),
        allow_unknown=allow_unknown,
    )
    palette = validate_palette_config(
        _load_yaml_with_overlay(config_dir / "palette.yml", overlay_config_dir),
        allow_unknown=allow_unknown,
    )
    return ConfigBundle(app=app, palette=palette, config_dir=config_dir)
