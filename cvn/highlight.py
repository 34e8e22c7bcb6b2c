"""Terminal colorizing for diff output.

Uses Pygments' diff lexer with a terminal formatter. Control bytes from the
compared files are escaped first to avoid terminal side effects.
"""

from __future__ import annotations

import re
import sys

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_STYLE, CvnConfig

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
        resolved = style
    except ClassNotFound:
        resolved = DEFAULT_STYLE
    formatter = TerminalFormatter(style=resolved)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_diff(diff_text: str, style: str = DEFAULT_STYLE) -> str:
    if not diff_text:
        return diff_text
    return highlight(sanitize_terminal_text(diff_text), DiffLexer(), _formatter_for_style(style))


def color_enabled(config: CvnConfig) -> bool:
    """Explicit config wins; otherwise color only when stdout is a terminal."""
    if config.color is not None:
        return config.color
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


__all__ = ["sanitize_terminal_text", "colorize_diff", "color_enabled"]
