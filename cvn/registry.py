"""Handler registry keyed by (VCS kind, subcommand name).

Lookups try the detected tool first, then the ``ANY`` wildcard. A miss
resolves to a handler that forwards the invocation to the real tool.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .external import forward
from .session import Session
from .vcs import VcsKind

HandlerFn = Callable[[Session | None, list[str]], int]


@dataclass(frozen=True)
class CommandHandler:
    """A simulated or forwarded subcommand: ``run(session, args) -> exit code``.

    Handlers with ``needs_working_copy=False`` run before VCS detection and
    receive ``None`` as their session.
    """

    run: HandlerFn
    needs_working_copy: bool = True
    forwards: bool = False


def _forward_command(command: str | None, session: Session | None, args: list[str]) -> int:
    assert session is not None
    argv = [command, *args] if command is not None else list(args)
    return forward(session.config, session.vcs, argv)


def forwarding_handler(command: str | None) -> CommandHandler:
    """Handler that passes ``command`` and its args through unchanged."""
    return CommandHandler(run=functools.partial(_forward_command, command), forwards=True)


class CommandRegistry:
    def __init__(self) -> None:
        self._handlers: dict[tuple[VcsKind, str], CommandHandler] = {}

    def register(self, vcs: VcsKind, names: Iterable[str], handler: CommandHandler) -> None:
        for name in names:
            self._handlers[(vcs, name)] = handler

    def find(self, vcs: VcsKind, command: str) -> CommandHandler | None:
        """Return the simulated handler for ``command``, or ``None``."""
        handler = self._handlers.get((vcs, command))
        if handler is None:
            handler = self._handlers.get((VcsKind.ANY, command))
        return handler

    def resolve(self, vcs: VcsKind, command: str | None) -> CommandHandler:
        """Return the handler to run; unsimulated commands forward to the tool."""
        if command is not None:
            handler = self.find(vcs, command)
            if handler is not None:
                return handler
        return forwarding_handler(command)


__all__ = ["CommandHandler", "CommandRegistry", "forwarding_handler"]
