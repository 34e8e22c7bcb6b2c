"""Working-tree traversal the way cvs itself walks a checkout.

Yields only leaves, never control directories, in lexical order per
directory. Each leaf carries its ``Entries`` record when the directory's
metadata knows the name.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .entries import TrackedDirectory, TrackedFile, join_relative
from .session import Session
from .vcs import CONTROL_DIRECTORIES

logger = logging.getLogger(__name__)

SKIPPED_NAMES = frozenset(CONTROL_DIRECTORIES.values())


@dataclass(frozen=True)
class WorkingTreeNode:
    """One visited file plus its tracked record, or ``None`` when untracked."""

    path: Path
    entry: TrackedFile | None = None

    @property
    def tracked(self) -> bool:
        return self.entry is not None


def _sorted_children(directory: Path) -> list[str]:
    try:
        names = os.listdir(directory)
    except OSError as exc:
        logger.debug("cannot list %s: %s", directory, exc)
        return []
    return sorted(name for name in names if name not in SKIPPED_NAMES)


def normalize_start_path(root: Path, raw: str) -> Path:
    """Turn a command-line path into a root-relative one when it lies under ``root``."""
    candidate = Path(os.path.normpath(raw))
    if candidate.is_absolute():
        try:
            return candidate.relative_to(root)
        except ValueError:
            return candidate
    return candidate


def _is_ignored_directory(session: Session, rel: Path) -> bool:
    """Untracked directories named by their parent's ``.cvsignore`` are pruned."""
    if isinstance(session.entries.lookup(rel), TrackedDirectory):
        return False
    return session.ignores.is_ignored(rel)


def _visit(session: Session, rel: Path, explicit: bool = False) -> Iterator[WorkingTreeNode]:
    if rel.name in SKIPPED_NAMES:
        return
    absolute = session.absolute(rel)
    try:
        st = absolute.lstat()
    except FileNotFoundError:
        logger.warning("%s: no such file or directory", rel)
        return
    except OSError as exc:
        logger.debug("cannot stat %s: %s", absolute, exc)
        return

    if stat.S_ISDIR(st.st_mode):
        if not explicit and _is_ignored_directory(session, rel):
            return
        for name in _sorted_children(absolute):
            yield from _visit(session, join_relative(rel, name))
        return

    entry = session.entries.lookup(rel)
    yield WorkingTreeNode(path=rel, entry=entry if isinstance(entry, TrackedFile) else None)


def walk_working_tree(session: Session, paths: Iterable[str] = ()) -> Iterator[WorkingTreeNode]:
    """Lazily walk ``paths`` (default: the root's children) depth-first."""
    starts = [normalize_start_path(session.root, raw) for raw in paths]
    if starts:
        for start in starts:
            yield from _visit(session, start, explicit=True)
        return
    for name in _sorted_children(session.root):
        yield from _visit(session, Path(name))


__all__ = ["SKIPPED_NAMES", "WorkingTreeNode", "normalize_start_path", "walk_working_tree"]
