"""Request-scoped state shared by one cvn invocation.

A ``Session`` owns the parsed-metadata and ignore-rule caches plus the
reference-text store. Nothing outlives the command that created it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import CvnConfig
from .cvsignore import IgnoreMatcher
from .entries import EntriesReader
from .texts import ReferenceCache
from .vcs import VcsKind


@dataclass
class Session:
    root: Path
    vcs: VcsKind
    config: CvnConfig
    entries: EntriesReader = field(init=False)
    ignores: IgnoreMatcher = field(init=False)
    texts: ReferenceCache = field(init=False)

    def __post_init__(self) -> None:
        self.entries = EntriesReader(self.root)
        self.ignores = IgnoreMatcher(self.root)
        self.texts = ReferenceCache(self.root, self.config)

    def absolute(self, path: Path) -> Path:
        """Resolve a root-relative path for filesystem access."""
        return self.root / path


__all__ = ["Session"]
