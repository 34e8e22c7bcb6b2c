"""Blocking invocation of external tools (cvs, svn, diff, grep).

Children inherit stdin/stdout/stderr unless a caller asks to capture output,
so per-file output appears in traversal order. No timeouts are applied.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import CvnConfig
from .entries import TrackedFile
from .vcs import VcsKind, tool_argv

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126
KILLED_BY_SIGNAL = 128


def _report_launch_error(program: str, exc: OSError) -> int:
    if isinstance(exc, FileNotFoundError):
        sys.stderr.write(f"cvn: {program}: command not found\n")
        return COMMAND_NOT_FOUND
    sys.stderr.write(f"cvn: cannot run {program}: {exc}\n")
    return COMMAND_NOT_EXECUTABLE


def exit_status(returncode: int) -> int:
    """Report a signal death as ``128 + signum``, the way a shell does."""
    if returncode < 0:
        return KILLED_BY_SIGNAL - returncode
    return returncode


def run_tool(argv: Sequence[str], cwd: Path | None = None) -> int:
    """Run ``argv`` to completion with inherited streams; return its exit code."""
    sys.stdout.flush()
    logger.debug("running %s", argv)
    try:
        proc = subprocess.run(list(argv), cwd=cwd, check=False)
    except OSError as exc:
        return _report_launch_error(argv[0], exc)
    return exit_status(proc.returncode)


def capture_tool(argv: Sequence[str], cwd: Path | None = None) -> tuple[int, str]:
    """Run ``argv`` capturing stdout as text; stderr stays inherited."""
    sys.stdout.flush()
    logger.debug("running %s (captured)", argv)
    try:
        proc = subprocess.run(
            list(argv),
            cwd=cwd,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        return _report_launch_error(argv[0], exc), ""
    return exit_status(proc.returncode), proc.stdout


def forward(config: CvnConfig, vcs: VcsKind, argv: Sequence[str]) -> int:
    """Hand the whole invocation to the real tool and adopt its exit code."""
    return run_tool([*tool_argv(config, vcs), *argv])


def fetch_revision(config: CvnConfig, root: Path, entry: TrackedFile, dest: Path) -> bool:
    """Write ``entry``'s committed revision into ``dest`` via ``cvs update -p``.

    The content lands in a sibling temp file first and replaces ``dest`` only
    when cvs succeeds. Returns ``False`` on any failure, leaving ``dest`` as it was.
    """
    argv = [*config.cvs, "-Q", "update", "-p", "-r", entry.revision, "--", entry.path.as_posix()]
    tmp = dest.with_name(f".#{dest.name}.cvn-tmp")
    sys.stdout.flush()
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("wb") as handle:
            proc = subprocess.run(
                argv,
                cwd=root,
                stdout=handle,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        if proc.returncode != 0:
            logger.debug("%s exited with %d", argv, proc.returncode)
            tmp.unlink(missing_ok=True)
            return False
        if dest.exists():
            shutil.copymode(dest, tmp)
        os.replace(tmp, dest)
    except OSError as exc:
        logger.debug("fetching %s r%s failed: %s", entry.path, entry.revision, exc)
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            pass
        return False
    return True


__all__ = ["COMMAND_NOT_FOUND", "exit_status", "run_tool", "capture_tool", "forward", "fetch_revision"]
