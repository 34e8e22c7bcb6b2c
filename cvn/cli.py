"""Command-line front door for cvn.

Detects whether the current directory is a Subversion or CVS working copy,
runs a simulated subcommand when one is registered, and otherwise hands the
whole invocation to the real tool, exiting with its status.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .commands import build_registry
from .config import CvnConfig, load_config
from .registry import CommandRegistry
from .session import Session
from .vcs import VcsKind, detect_vcs

logger = logging.getLogger(__name__)

NOT_UNDER_VERSION_CONTROL = "cvn: not under version control (no .svn or CVS directory)"
INTERRUPTED = 130


def run(
    argv: Sequence[str],
    cwd: Path | None = None,
    config: CvnConfig | None = None,
    registry: CommandRegistry | None = None,
) -> int:
    """Dispatch one invocation and return its exit status."""
    root = cwd if cwd is not None else Path.cwd()
    config = config if config is not None else load_config()
    registry = registry if registry is not None else build_registry()
    command = argv[0] if argv else None
    args = list(argv[1:])

    if command is not None:
        standalone = registry.find(VcsKind.ANY, command)
        if standalone is not None and not standalone.needs_working_copy:
            return standalone.run(None, args)

    vcs = detect_vcs(root)
    if vcs is None:
        sys.stderr.write(NOT_UNDER_VERSION_CONTROL + "\n")
        return 1

    handler = registry.resolve(vcs, command)
    logger.debug(
        "%s %s under %s",
        "forwarding" if handler.forwards else "simulating",
        command or "(no command)",
        vcs.value,
    )
    session = Session(root=root, vcs=vcs, config=config)
    return handler.run(session, args)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``cvn`` script; always exits via ``SystemExit``."""
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="cvn: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    if argv is None:
        argv = sys.argv[1:]
    try:
        status = run(argv, config=config)
    except KeyboardInterrupt:
        status = INTERRUPTED
    raise SystemExit(status)


if __name__ == "__main__":
    main()
