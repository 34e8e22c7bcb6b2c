"""``get-texts`` and ``update``: keep the offline reference texts current."""

from __future__ import annotations

import logging

from ..external import forward
from ..session import Session
from ..walk import walk_working_tree

logger = logging.getLogger(__name__)


def get_texts(session: Session, paths: list[str] | None = None) -> int:
    """Capture a reference text for every tracked file; return how many are cached."""
    cached = 0
    for node in walk_working_tree(session, paths or ()):
        if node.entry is None:
            continue
        if session.texts.capture(node.entry) is not None:
            cached += 1
    logger.info("%d reference texts available", cached)
    return cached


def run_get_texts(session: Session, args: list[str]) -> int:
    get_texts(session, args)
    return 0


def run_get_texts_noop(session: Session | None, args: list[str]) -> int:
    """Subversion keeps pristine copies itself."""
    return 0


def run_update(session: Session, args: list[str], command: str = "update") -> int:
    """Forward ``command`` as typed to cvs, then refresh texts for the whole tree."""
    status = forward(session.config, session.vcs, [command, *args])
    get_texts(session)
    return status


__all__ = ["get_texts", "run_get_texts", "run_get_texts_noop", "run_update"]
