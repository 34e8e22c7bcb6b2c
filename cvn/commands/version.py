"""``version``: report cvn's own version."""

from __future__ import annotations

import sys

from .. import __version__
from ..session import Session


def version_string() -> str:
    return f"cvn version {__version__}"


def run_version(session: Session | None, args: list[str]) -> int:
    sys.stdout.write(version_string() + "\n")
    return 0


__all__ = ["version_string", "run_version"]
