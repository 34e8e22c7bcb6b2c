"""Recursive ``grep`` over the working tree, skipping control directories."""

from __future__ import annotations

import sys
from pathlib import Path

from ..external import run_tool
from ..session import Session
from ..walk import walk_working_tree
from .args import split_switches

USAGE = "usage: cvn grep [switches] [--] pattern [path ...]"


def search_tree(session: Session, switches: list[str], pattern: str, paths: list[str]) -> list[Path]:
    """Run grep once per walked file; return the files it matched."""
    matched: list[Path] = []
    for node in walk_working_tree(session, paths):
        argv = [*session.config.grep, *switches, "-e", pattern, "--", node.path.as_posix()]
        if run_tool(argv, cwd=session.root) == 0:
            matched.append(node.path)
    return matched


def run_search(session: Session, args: list[str]) -> int:
    switches, operands = split_switches(args)
    if not operands:
        sys.stderr.write(USAGE + "\n")
        return 1
    pattern, paths = operands[0], operands[1:]
    return 0 if search_tree(session, switches, pattern, paths) else 1


__all__ = ["USAGE", "search_tree", "run_search"]
