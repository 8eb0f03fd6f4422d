"""Persistent JSON config helpers.

Stores the default comparison depth and the color preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "dirtreediff"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks a scan.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_default_depth() -> int | None:
    """Return the persisted comparison depth, or ``None`` when unset/invalid.

    Booleans, non-integers, and values below 1 are rejected.
    """
    value = load_config().get("depth")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def save_default_depth(depth: int) -> None:
    if depth < 1:
        return
    config = load_config()
    config["depth"] = int(depth)
    save_config(config)


def load_color_enabled() -> bool | None:
    """Return the persisted color preference; only explicit booleans count."""
    value = load_config().get("color")
    return value if isinstance(value, bool) else None


def save_color_enabled(enabled: bool) -> None:
    config = load_config()
    config["color"] = bool(enabled)
    save_config(config)
