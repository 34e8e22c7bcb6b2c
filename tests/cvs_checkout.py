"""Builders for throwaway CVS working copies used across the tests."""

from __future__ import annotations

import os
from pathlib import Path

from cvn.timestamps import format_entry_timestamp

# 2001-09-09 01:46:40 UTC, safely before any file the tests create.
PAST = 1_000_000_000


def file_record(name: str, revision: str = "1.1", mtime: int | str = PAST) -> str:
    stamp = mtime if isinstance(mtime, str) else format_entry_timestamp(mtime)
    return f"/{name}/{revision}/{stamp}//"


def dir_record(name: str) -> str:
    return f"D/{name}////"


def write_entries(directory: Path, *records: str) -> Path:
    control = directory / "CVS"
    control.mkdir(parents=True, exist_ok=True)
    entries = control / "Entries"
    entries.write_text("".join(record + "\n" for record in records), encoding="utf-8")
    return entries


def write_file(path: Path, text: str, mtime: int | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def write_synced_file(directory: Path, name: str, text: str, revision: str = "1.1") -> str:
    """Create ``name`` stamped at ``PAST`` and return its matching Entries record."""
    write_file(directory / name, text, mtime=PAST)
    return file_record(name, revision, PAST)
