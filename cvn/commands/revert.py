"""Offline ``revert``: restore locally edited files to their committed text."""

from __future__ import annotations

import logging
import shutil
import sys

from ..external import fetch_revision
from ..session import Session
from ..timestamps import is_locally_modified, reset_mtime
from ..walk import walk_working_tree
from .args import is_switch

logger = logging.getLogger(__name__)


def run_revert(session: Session, args: list[str]) -> int:
    for arg in args:
        if is_switch(arg):
            sys.stderr.write(f"cvn: revert {arg} is not supported in CVS working copies\n")
            return 1

    result = 0
    for node in walk_working_tree(session, args):
        entry = node.entry
        if entry is None or entry.is_added or entry.is_removed:
            continue
        live = session.absolute(node.path)
        if not is_locally_modified(live, entry):
            continue

        reference = session.texts.capture(entry)
        try:
            if reference is not None:
                shutil.copyfile(reference, live)
                restored = True
            else:
                restored = fetch_revision(session.config, session.root, entry, live)
            if restored:
                reset_mtime(live, entry)
        except OSError as exc:
            logger.debug("revert of %s failed: %s", live, exc)
            restored = False

        if not restored:
            sys.stderr.write(f"cvn: could not revert {node.path.as_posix()}\n")
            result = 1
            continue
        sys.stdout.write(f"Reverted '{node.path.as_posix()}'\n")
    return result


__all__ = ["run_revert"]
