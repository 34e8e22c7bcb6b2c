"""CVS timestamp parsing and live-file modification checks.

CVS records server-side modification times in ``Entries`` as asctime-style
UTC text. Comparisons are done in whole seconds, matching that resolution.
"""

from __future__ import annotations

import calendar
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entries import TrackedFile

ENTRY_TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Y"
_MERGE_PREFIX = "Result of merge+"


def parse_entry_timestamp(text: str) -> int | None:
    """Parse an ``Entries`` timestamp field into UTC epoch seconds.

    Placeholders written by ``cvs add`` or a conflicting merge
    (``dummy timestamp``, ``Initial foo``, ``Result of merge``) yield ``None``.
    """
    value = text.strip()
    if value.startswith(_MERGE_PREFIX):
        value = value[len(_MERGE_PREFIX):]
    if not value:
        return None
    try:
        parsed = time.strptime(value, ENTRY_TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return calendar.timegm(parsed)


def format_entry_timestamp(epoch: int) -> str:
    """Format UTC epoch seconds the way CVS writes them into ``Entries``."""
    return time.asctime(time.gmtime(epoch))


def live_mtime(path: Path) -> int | None:
    """Return whole-second mtime for ``path`` or ``None`` when it cannot be stat'ed."""
    try:
        return int(path.stat().st_mtime)
    except OSError:
        return None


def is_locally_modified(path: Path, entry: TrackedFile) -> bool:
    """Return whether the live file is newer than the server-recorded time.

    An unknown recorded time counts as modified; a missing file does not.
    """
    current = live_mtime(path)
    if current is None:
        return False
    if entry.server_mtime is None:
        return True
    return current > entry.server_mtime


def reset_mtime(path: Path, entry: TrackedFile) -> None:
    """Stamp ``path`` with the entry's server time so it reads as unmodified."""
    if entry.server_mtime is None:
        return
    os.utime(path, (entry.server_mtime, entry.server_mtime))


__all__ = [
    "ENTRY_TIMESTAMP_FORMAT",
    "parse_entry_timestamp",
    "format_entry_timestamp",
    "live_mtime",
    "is_locally_modified",
    "reset_mtime",
]
