""".cvsignore-aware filtering of untracked files.

Patterns are shell globs matched against bare filenames and scope to the
directory holding the ``.cvsignore`` file; subdirectories do not inherit them.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".cvsignore"
_RESET_LINE = "!"


def compile_ignore_patterns(lines: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    """Translate one glob per line into anchored filename regexes.

    A lone ``!`` discards patterns read so far. Lines that do not compile
    are skipped.
    """
    patterns: list[re.Pattern[str]] = []
    for raw in lines:
        glob = raw.strip()
        if not glob:
            continue
        if glob == _RESET_LINE:
            patterns.clear()
            continue
        try:
            patterns.append(re.compile(fnmatch.translate(glob)))
        except re.error as exc:
            logger.debug("skipping ignore pattern %r: %s", glob, exc)
    return tuple(patterns)


class IgnoreMatcher:
    """Per-invocation cache of compiled ``.cvsignore`` rules keyed by directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._cache: dict[Path, tuple[re.Pattern[str], ...]] = {}

    def patterns_for(self, directory: Path) -> tuple[re.Pattern[str], ...]:
        cached = self._cache.get(directory)
        if cached is not None:
            return cached

        ignore_path = self.root / directory / IGNORE_FILENAME
        try:
            lines = ignore_path.read_text(encoding="utf-8", errors="surrogateescape").splitlines()
        except FileNotFoundError:
            lines = []
        except OSError as exc:
            logger.debug("cannot read %s: %s", ignore_path, exc)
            lines = []

        patterns = compile_ignore_patterns(lines)
        self._cache[directory] = patterns
        return patterns

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path``'s basename matches its own directory's rules."""
        name = path.name
        return any(pattern.match(name) for pattern in self.patterns_for(path.parent))


__all__ = ["IGNORE_FILENAME", "compile_ignore_patterns", "IgnoreMatcher"]
