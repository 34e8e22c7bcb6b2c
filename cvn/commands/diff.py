"""Offline ``diff`` against cached reference texts.

Files without a cached text fall back to ``cvs diff`` over the network.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from ..external import capture_tool, run_tool
from ..highlight import color_enabled, colorize_diff
from ..session import Session
from ..walk import walk_working_tree
from .args import split_switches

# diff(1) exits 1 when files differ; anything above that is trouble.
DIFF_TROUBLE = 2


def _emit(session: Session, argv: Sequence[str], colorize: bool) -> int:
    if not colorize:
        return run_tool(argv, cwd=session.root)
    status, output = capture_tool(argv, cwd=session.root)
    sys.stdout.write(colorize_diff(output, session.config.style))
    return status


def run_diff(session: Session, args: list[str]) -> int:
    switches, paths = split_switches(args)
    options = switches or list(session.config.diff_options)
    colorize = color_enabled(session.config)
    result = 0

    for node in walk_working_tree(session, paths):
        entry = node.entry
        if entry is None:
            continue
        reference = None if entry.is_added else session.texts.capture(entry)
        if reference is None:
            if not entry.is_added:
                sys.stderr.write(
                    f"cvn: no offline copy of {entry.path.as_posix()} (r{entry.revision}), asking the server\n"
                )
            argv = [*session.config.cvs, "diff", *options, "--", entry.path.as_posix()]
        else:
            argv = [
                *session.config.diff,
                *options,
                "--",
                reference.relative_to(session.root).as_posix(),
                node.path.as_posix(),
            ]
        if _emit(session, argv, colorize) >= DIFF_TROUBLE:
            result = 1
    return result


__all__ = ["run_diff"]
