"""Simulated subcommands and the default registry wiring them up.

CVS gets offline status/diff/revert plus text caching; both tools get grep
and version. Everything else is forwarded to the real binary.
"""

from __future__ import annotations

import functools

from ..registry import CommandHandler, CommandRegistry
from ..vcs import VcsKind
from .diff import run_diff
from .revert import run_revert
from .search import run_search
from .status import run_status
from .texts import run_get_texts, run_get_texts_noop, run_update
from .version import run_version


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(VcsKind.CVS, ("status", "st", "stat"), CommandHandler(run_status))
    registry.register(VcsKind.CVS, ("diff", "di", "dif"), CommandHandler(run_diff))
    registry.register(VcsKind.CVS, ("revert",), CommandHandler(run_revert))
    for name in ("update", "up"):
        registry.register(VcsKind.CVS, (name,), CommandHandler(functools.partial(run_update, command=name)))
    registry.register(VcsKind.CVS, ("get-texts",), CommandHandler(run_get_texts))
    registry.register(VcsKind.SVN, ("get-texts",), CommandHandler(run_get_texts_noop))
    registry.register(VcsKind.ANY, ("grep", "search"), CommandHandler(run_search))
    registry.register(
        VcsKind.ANY,
        ("version", "--version"),
        CommandHandler(run_version, needs_working_copy=False),
    )
    return registry


__all__ = ["build_registry"]
