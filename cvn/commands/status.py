"""Offline ``status`` for CVS working copies.

Reports ``?`` for untracked files that no ``.cvsignore`` rule hides, ``A``
for added files, ``R`` for files scheduled for removal, and ``M`` for files
newer than their recorded server time. Up-to-date files print nothing.
"""

from __future__ import annotations

import sys

from ..session import Session
from ..timestamps import is_locally_modified
from ..walk import WorkingTreeNode, walk_working_tree
from .args import is_switch

STATUS_UNTRACKED = "?"
STATUS_ADDED = "A"
STATUS_REMOVED = "R"
STATUS_MODIFIED = "M"


def status_code(session: Session, node: WorkingTreeNode) -> str | None:
    """Return the one-letter status for ``node`` or ``None`` when up to date."""
    entry = node.entry
    if entry is None:
        if session.ignores.is_ignored(node.path):
            return None
        return STATUS_UNTRACKED
    if entry.is_added:
        return STATUS_ADDED
    if entry.is_removed:
        return STATUS_REMOVED
    if is_locally_modified(session.absolute(node.path), entry):
        return STATUS_MODIFIED
    return None


def run_status(session: Session, args: list[str]) -> int:
    # Switches are rejected before anything is printed.
    for arg in args:
        if is_switch(arg):
            sys.stderr.write(f"cvn: status {arg} is not supported in CVS working copies\n")
            return 1

    for node in walk_working_tree(session, args):
        code = status_code(session, node)
        if code is not None:
            sys.stdout.write(f"{code} {node.path.as_posix()}\n")
    return 0


__all__ = [
    "STATUS_UNTRACKED",
    "STATUS_ADDED",
    "STATUS_REMOVED",
    "STATUS_MODIFIED",
    "status_code",
    "run_status",
]
