"""Offline store of committed file texts for diff and revert.

Each text lives at ``<dir>/CVS/cvn-texts/<name>,<revision>`` next to the
working file and is stamped with the entry's server mtime. A new revision
gets a new file; superseded texts stay on disk and are never looked up again.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .config import CvnConfig
from .entries import CONTROL_DIRNAME, TrackedFile
from .external import fetch_revision
from .timestamps import is_locally_modified, reset_mtime

logger = logging.getLogger(__name__)

TEXTS_DIRNAME = "cvn-texts"


def text_key(entry: TrackedFile) -> str:
    """Cache filename for ``entry``; unique per (name, revision) within a directory."""
    return f"{entry.name},{entry.revision}"


class ReferenceCache:
    def __init__(self, root: Path, config: CvnConfig) -> None:
        self.root = root
        self.config = config

    def location(self, entry: TrackedFile) -> Path:
        return self.root / entry.directory / CONTROL_DIRNAME / TEXTS_DIRNAME / text_key(entry)

    def lookup(self, entry: TrackedFile) -> Path | None:
        """Return the cached text for ``entry`` when present."""
        location = self.location(entry)
        return location if location.is_file() else None

    def capture(self, entry: TrackedFile) -> Path | None:
        """Ensure a cached text exists for ``entry``; return it or ``None``.

        An unmodified working file is copied as-is. Otherwise the revision is
        fetched from cvs. Failures are absorbed: callers fall back to the
        server when this returns ``None``.
        """
        existing = self.lookup(entry)
        if existing is not None:
            return existing
        if entry.is_added or entry.is_removed:
            return None

        location = self.location(entry)
        live = self.root / entry.path
        if live.is_file() and not is_locally_modified(live, entry):
            if not self._copy_live(live, location):
                return None
        elif not fetch_revision(self.config, self.root, entry, location):
            logger.debug("no reference text for %s r%s", entry.path, entry.revision)
            return None

        try:
            reset_mtime(location, entry)
        except OSError as exc:
            logger.debug("cannot stamp %s: %s", location, exc)
        return location

    def _copy_live(self, live: Path, location: Path) -> bool:
        tmp = location.with_name(f".#{location.name}.cvn-tmp")
        try:
            location.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(live, tmp)
            os.replace(tmp, location)
        except OSError as exc:
            logger.debug("cannot copy %s to %s: %s", live, location, exc)
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass
            return False
        return True


__all__ = ["TEXTS_DIRNAME", "text_key", "ReferenceCache"]
