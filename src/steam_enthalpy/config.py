"""Settings defaults with JSON-file and environment overrides."""

from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping

CONFIG_ENV = "STEAM_ENTHALPY_CONFIG"
TABLE_PATH_ENV = "STEAM_ENTHALPY_TABLE_PATH"
MAX_POINTS_ENV = "STEAM_ENTHALPY_MAX_POINTS"
MEDIUM_ENV = "STEAM_ENTHALPY_MEDIUM"

MEDIA = ("steam", "air")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "medium": "steam",
    "history": {"max_data_points": 50},
    "table": {"path": None},
    "ui": {"notification_ms": 3000, "dark_theme": False},
    "logging": {"level": "WARNING"},
}


class ConfigError(ValueError):
    """Raised when a settings file or override cannot be used."""


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries without mutating the inputs."""

    merged: Dict[str, Any] = deepcopy(dict(base))
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def load_settings_file(path: Path) -> Dict[str, Any]:
    """Load a JSON settings file."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Settings file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    return dict(data)


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if env.get(TABLE_PATH_ENV):
        overrides["table"] = {"path": env[TABLE_PATH_ENV]}
    if env.get(MAX_POINTS_ENV):
        raw = env[MAX_POINTS_ENV]
        try:
            overrides["history"] = {"max_data_points": int(raw)}
        except ValueError:
            raise ConfigError(f"{MAX_POINTS_ENV} must be an integer, got {raw!r}") from None
    if env.get(MEDIUM_ENV):
        overrides["medium"] = env[MEDIUM_ENV].strip().lower()
    return overrides


def validate_settings(settings: Mapping[str, Any]) -> None:
    max_points = settings.get("history", {}).get("max_data_points")
    if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points <= 0:
        raise ConfigError(f"history.max_data_points must be a positive integer, got {max_points!r}")
    medium = settings.get("medium")
    if medium not in MEDIA:
        raise ConfigError(f"medium must be one of {', '.join(MEDIA)}, got {medium!r}")
    notification_ms = settings.get("ui", {}).get("notification_ms")
    if not isinstance(notification_ms, int) or notification_ms < 0:
        raise ConfigError(f"ui.notification_ms must be a non-negative integer, got {notification_ms!r}")


def load_settings(path: Path | str | None = None, env: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Return defaults merged with the settings file and environment overrides."""

    environ = os.environ if env is None else env
    settings = deepcopy(DEFAULT_SETTINGS)

    file_path = path or environ.get(CONFIG_ENV)
    if file_path:
        settings = deep_merge(settings, load_settings_file(Path(file_path)))

    settings = deep_merge(settings, _env_overrides(environ))
    validate_settings(settings)
    return settings


__all__ = [
    "ConfigError",
    "DEFAULT_SETTINGS",
    "MEDIA",
    "deep_merge",
    "load_settings",
    "load_settings_file",
    "validate_settings",
]
