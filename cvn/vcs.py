"""Detection of the version-control tool that manages a directory."""

from __future__ import annotations

import enum
from pathlib import Path

from .config import CvnConfig


class VcsKind(enum.Enum):
    SVN = "svn"
    CVS = "cvs"
    # Registry wildcard: handlers that work under either tool.
    ANY = "any"


CONTROL_DIRECTORIES: dict[VcsKind, str] = {
    VcsKind.SVN: ".svn",
    VcsKind.CVS: "CVS",
}

# Checked in order; the first control directory present wins.
DETECTION_ORDER = (VcsKind.SVN, VcsKind.CVS)


def detect_vcs(root: Path) -> VcsKind | None:
    """Return the tool whose control directory sits directly in ``root``."""
    for kind in DETECTION_ORDER:
        if (root / CONTROL_DIRECTORIES[kind]).is_dir():
            return kind
    return None


def tool_argv(config: CvnConfig, vcs: VcsKind) -> tuple[str, ...]:
    """Return the configured command prefix for ``vcs``."""
    if vcs is VcsKind.SVN:
        return config.svn
    if vcs is VcsKind.CVS:
        return config.cvs
    raise ValueError(f"no binary for {vcs}")


__all__ = ["VcsKind", "CONTROL_DIRECTORIES", "DETECTION_ORDER", "detect_vcs", "tool_argv"]
