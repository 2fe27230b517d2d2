"""Persistent JSON config helpers.

Stores the selection wrap preference, theme name, scan admission cap, and
scan error policy. All access is defensive: malformed or missing config falls
back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazydu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_bool(key: str) -> bool:
    """Only explicit booleans count; anything else reads as ``False``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else False


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_wrap_selection() -> bool:
    """Return whether selection movement wraps around at either end."""
    return _load_bool("wrap_selection")


def save_wrap_selection(enabled: bool) -> None:
    _save_value("wrap_selection", bool(enabled))


def load_strict_scan() -> bool:
    return _load_bool("strict_scan")


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_max_scan_tasks() -> int | None:
    """Load the scan admission cap; booleans and non-positive ints are ignored."""
    value = load_config().get("max_scan_tasks")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_wrap_selection",
    "save_wrap_selection",
    "load_strict_scan",
    "load_theme_name",
    "load_max_scan_tasks",
]
