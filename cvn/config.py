"""Persistent JSON config helpers.

Stores external tool command lines, diff defaults, color and log preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import shlex
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "cvn"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class CvnConfig:
    """Resolved settings; every command field is an argv prefix."""

    cvs: tuple[str, ...] = ("cvs",)
    svn: tuple[str, ...] = ("svn",)
    diff: tuple[str, ...] = ("diff",)
    grep: tuple[str, ...] = ("grep", "-H")
    diff_options: tuple[str, ...] = ("-u",)
    color: bool | None = None
    style: str = DEFAULT_STYLE
    log_level: str = DEFAULT_LOG_LEVEL


def load_config_data() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_argv(value: object, default: tuple[str, ...], allow_empty: bool = False) -> tuple[str, ...]:
    """Accept a shell-style string or a list of strings; anything else is the default."""
    if isinstance(value, str):
        try:
            parts = tuple(shlex.split(value))
        except ValueError:
            return default
    elif isinstance(value, list) and all(isinstance(item, str) for item in value):
        parts = tuple(value)
    else:
        return default
    if not parts and not allow_empty:
        return default
    return parts


def _coerce_color(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def _coerce_style(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def _coerce_log_level(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    normalized = value.strip().upper()
    return normalized if normalized in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def load_config() -> CvnConfig:
    """Build a ``CvnConfig`` from the JSON file, validating every key."""
    data = load_config_data()
    defaults = CvnConfig()
    tools = data.get("tools")
    if not isinstance(tools, dict):
        tools = {}

    return CvnConfig(
        cvs=_coerce_argv(tools.get("cvs"), defaults.cvs),
        svn=_coerce_argv(tools.get("svn"), defaults.svn),
        diff=_coerce_argv(tools.get("diff"), defaults.diff),
        grep=_coerce_argv(tools.get("grep"), defaults.grep),
        diff_options=_coerce_argv(data.get("diff_options"), defaults.diff_options, allow_empty=True),
        color=_coerce_color(data.get("color")),
        style=_coerce_style(data.get("style")),
        log_level=_coerce_log_level(data.get("log_level")),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "CvnConfig",
    "load_config",
    "load_config_data",
]
