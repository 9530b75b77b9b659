"""Project config (.codescore/config.json)."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .utils import PROJECT_ROOT, safe_write_text

CONFIG_FILE = PROJECT_ROOT / ".codescore" / "config.json"
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "transformer_points": ConfigKey(dict, {},
        "Extra or overriding base points {transformer_id: points}"),
    "max_input_chars": ConfigKey(int, 200_000,
        "Refuse to score inputs longer than this many characters (0 = unlimited)"),
    "leaderboard_limit": ConfigKey(int, 10,
        "Rows shown by the leaderboard command (0 = unlimited)"),
}

_UNLIMITED_WORDS = ("none", "unlimited")


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def _matches_schema(schema: ConfigKey, value: Any) -> bool:
    if schema.type is int:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return isinstance(value, schema.type)


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing keys with defaults.

    A missing or unreadable file yields the defaults, and values that do not
    fit their schema type are replaced by the default.
    """
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.debug("Ignoring unreadable config %s", p, exc_info=exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        if key in config and not _matches_schema(schema, config[key]):
            logger.warning("Config %s has invalid value %r; using default", key, config[key])
            del config[key]
        if key not in config:
            config[key] = copy.deepcopy(schema.default)
    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    Handles special cases:
    - "none"/"unlimited" → 0 for int keys
    - "name=points" pairs for transformer_points
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is int:
        if raw.lower() in _UNLIMITED_WORDS:
            config[key] = 0
            return
        value = int(raw)
        if value < 0:
            raise ValueError(f"Expected a non-negative integer for {key}, got: {raw}")
        config[key] = value
    elif schema.type is dict:
        name, sep, points = raw.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected name=points for {key}, got: {raw}")
        config.setdefault(key, {})[name.strip()] = int(points)
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


def transformer_points(config: dict[str, Any]) -> dict[str, int]:
    """Validated transformer_points overrides; non-integer entries are dropped."""
    raw = config.get("transformer_points") or {}
    if not isinstance(raw, dict):
        raise ValueError("transformer_points must be an object of {transformer_id: points}")
    points: dict[str, int] = {}
    for name, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int):
            logger.debug("Dropping non-integer points for transformer %s: %r", name, value)
            continue
        points[str(name)] = value
    return points
