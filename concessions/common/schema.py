"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from concessions.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_number(value, ctx: str, *, positive: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number")
    if positive and value <= 0:
        raise ConfigError(f"{ctx} must be greater than zero")


def _assert_str_table(table, ctx: str) -> None:
    _assert_mapping(table, ctx)
    for key, value in table.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigError(f"{ctx} entries must map strings to strings (bad entry: {key!r})")


def validate_app_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "app config")
    top_required = {"placeholder_marker", "top_k", "map", "dataset", "http"}
    _assert_required_keys(cfg, top_required, "app config")
    _assert_no_unknown_keys(cfg, top_required, "app config", allow_unknown)

    if not isinstance(cfg["placeholder_marker"], str) or not cfg["placeholder_marker"]:
        raise ConfigError("app.placeholder_marker must be a non-empty string")
    if isinstance(cfg["top_k"], bool) or not isinstance(cfg["top_k"], int) or cfg["top_k"] < 1:
        raise ConfigError("app.top_k must be a positive integer")

    _assert_mapping(cfg["map"], "map")
    _assert_required_keys(cfg["map"], {"center", "zoom"}, "map")
    _assert_mapping(cfg["map"]["center"], "map.center")
    _assert_required_keys(cfg["map"]["center"], {"lat", "lng"}, "map.center")
    _assert_number(cfg["map"]["center"]["lat"], "map.center.lat")
    _assert_number(cfg["map"]["center"]["lng"], "map.center.lng")
    _assert_number(cfg["map"]["zoom"], "map.zoom")

    _assert_mapping(cfg["dataset"], "dataset")
    _assert_required_keys(cfg["dataset"], {"source"}, "dataset")
    source = cfg["dataset"]["source"]
    if source is not None and not isinstance(source, str):
        raise ConfigError("dataset.source must be a string or null")

    _assert_mapping(cfg["http"], "http")
    _assert_required_keys(cfg["http"], {"connect_timeout", "read_timeout", "max_attempts"}, "http")
    _assert_number(cfg["http"]["connect_timeout"], "http.connect_timeout", positive=True)
    _assert_number(cfg["http"]["read_timeout"], "http.read_timeout", positive=True)
    attempts = cfg["http"]["max_attempts"]
    if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
        raise ConfigError("http.max_attempts must be a positive integer")

    return cfg


def validate_palette_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "palette config")
    top_required = {"resource_type_colors", "status_colors", "default_color"}
    _assert_required_keys(cfg, top_required, "palette config")
    _assert_no_unknown_keys(cfg, top_required, "palette config", allow_unknown)

    _assert_str_table(cfg["resource_type_colors"], "palette.resource_type_colors")
    _assert_str_table(cfg["status_colors"], "palette.status_colors")
    if not isinstance(cfg["default_color"], str) or not cfg["default_color"]:
        raise ConfigError("palette.default_color must be a non-empty string")

    return cfg
