"""Per-user paths and persisted settings.

Settings live in an optional ``config.json`` beside the snippet file. All
access is defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

log = logging.getLogger(__name__)

APP_NAME = "sniprrr"
SNIPPETS_FILENAME = "messages.json"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "sniprrr.log"

DEFAULT_THEME = "default"
DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def config_dir() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False))


def log_dir() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


CONFIG_PATH = config_dir() / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    theme: str = DEFAULT_THEME
    style: str = DEFAULT_STYLE
    quit_after_copy: bool = False
    no_color: bool = False
    log_level: str = DEFAULT_LOG_LEVEL


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        log.warning("config %s unreadable: %s", CONFIG_PATH, exc)
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        log.warning("config %s is not valid JSON: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("config %s is not a JSON object; ignoring", CONFIG_PATH)
        return {}
    return data


def _string_setting(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_settings() -> Settings:
    """Read ``config.json`` into ``Settings``, keeping defaults for invalid values."""
    data = load_config()
    quit_after_copy = data.get("quit_after_copy")
    no_color = data.get("no_color")
    log_level = _string_setting(data, "log_level", DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL
    return Settings(
        theme=_string_setting(data, "theme", DEFAULT_THEME),
        style=_string_setting(data, "style", DEFAULT_STYLE),
        quit_after_copy=quit_after_copy if isinstance(quit_after_copy, bool) else False,
        no_color=no_color if isinstance(no_color, bool) else False,
        log_level=log_level,
    )
