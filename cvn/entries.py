"""Reader for CVS per-directory ``Entries`` bookkeeping.

Each line of ``CVS/Entries`` is ``/name/revision/timestamp/options/tag`` for a
file or ``D/name////`` for a subdirectory. ``CVS/Entries.Log`` holds ``A`` and
``R`` lines that CVS has not yet folded back into ``Entries``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from .timestamps import parse_entry_timestamp

logger = logging.getLogger(__name__)

CONTROL_DIRNAME = "CVS"
ENTRIES_FILENAME = "Entries"
ENTRIES_LOG_FILENAME = "Entries.Log"
DIRECTORY_MARKER = "D"
_FIELD_COUNT = 6

_EMPTY: Mapping[str, "TrackedEntry"] = MappingProxyType({})


def join_relative(directory: Path, name: str) -> Path:
    """Join ``name`` onto a root-relative directory without a leading ``./``."""
    return Path(name) if directory == Path(".") else directory / name


@dataclass(frozen=True)
class TrackedFile:
    """File record: revision plus the server-recorded modification time."""

    name: str
    directory: Path
    revision: str
    server_mtime: int | None
    options: str = ""
    tag: str = ""

    @property
    def path(self) -> Path:
        return join_relative(self.directory, self.name)

    @property
    def is_added(self) -> bool:
        """Scheduled by ``cvs add`` but never committed."""
        return self.revision in ("", "0")

    @property
    def is_removed(self) -> bool:
        return self.revision.startswith("-")


@dataclass(frozen=True)
class TrackedDirectory:
    """Directory-marker record; carries no revision or timestamp."""

    name: str
    directory: Path

    @property
    def path(self) -> Path:
        return join_relative(self.directory, self.name)


TrackedEntry = TrackedFile | TrackedDirectory


def parse_entry_line(line: str, directory: Path) -> TrackedEntry | None:
    """Parse one ``Entries`` record, returning ``None`` for lines that are not records."""
    fields = line.rstrip("\r\n").split("/")
    if len(fields) < _FIELD_COUNT:
        return None
    marker, name, revision, timestamp, options, tag = fields[:_FIELD_COUNT]
    if not name:
        return None
    if marker == DIRECTORY_MARKER:
        return TrackedDirectory(name=name, directory=directory)
    if marker:
        return None
    return TrackedFile(
        name=name,
        directory=directory,
        revision=revision,
        server_mtime=parse_entry_timestamp(timestamp),
        options=options,
        tag=tag,
    )


def _read_lines(path: Path) -> list[str] | None:
    try:
        return path.read_text(encoding="utf-8", errors="surrogateescape").splitlines()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None


def parse_entries(lines: list[str], directory: Path) -> dict[str, TrackedEntry]:
    """Build ``name -> entry`` from ``Entries`` lines; later lines win."""
    records: dict[str, TrackedEntry] = {}
    for line in lines:
        entry = parse_entry_line(line, directory)
        if entry is not None:
            records[entry.name] = entry
    return records


def apply_entries_log(records: dict[str, TrackedEntry], lines: list[str], directory: Path) -> None:
    """Fold ``Entries.Log`` add/remove commands into ``records`` in order."""
    for line in lines:
        command, _sep, rest = line.partition(" ")
        entry = parse_entry_line(rest, directory)
        if entry is None:
            continue
        if command == "A":
            records[entry.name] = entry
        elif command == "R":
            records.pop(entry.name, None)


class EntriesReader:
    """Per-invocation reader that parses each directory's ``Entries`` once.

    Results are cached for the reader's lifetime, so changes written by an
    external tool after the first read are not observed.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self._cache: dict[Path, Mapping[str, TrackedEntry]] = {}

    def entries_for(self, directory: Path) -> Mapping[str, TrackedEntry]:
        """Return the tracked entries of ``directory`` (relative to the root)."""
        cached = self._cache.get(directory)
        if cached is not None:
            return cached

        control_dir = self.root / directory / CONTROL_DIRNAME
        lines = _read_lines(control_dir / ENTRIES_FILENAME)
        if lines is None:
            records: Mapping[str, TrackedEntry] = _EMPTY
        else:
            parsed = parse_entries(lines, directory)
            log_lines = _read_lines(control_dir / ENTRIES_LOG_FILENAME)
            if log_lines:
                apply_entries_log(parsed, log_lines, directory)
            records = MappingProxyType(parsed)
            logger.debug("read %d entries for %s", len(parsed), directory)

        self._cache[directory] = records
        return records

    def lookup(self, path: Path) -> TrackedEntry | None:
        """Return the entry recorded for ``path`` in its own directory."""
        return self.entries_for(path.parent).get(path.name)


__all__ = [
    "CONTROL_DIRNAME",
    "ENTRIES_FILENAME",
    "ENTRIES_LOG_FILENAME",
    "DIRECTORY_MARKER",
    "join_relative",
    "TrackedFile",
    "TrackedDirectory",
    "TrackedEntry",
    "parse_entry_line",
    "parse_entries",
    "apply_entries_log",
    "EntriesReader",
]
