"""Workspace discovery of style files by glob pattern.

Walks the tree once with ``os.walk``, pruning VCS internals and vendored or
build directories in place so they are never descended into.
"""

from __future__ import annotations

import fnmatch
import os
import re
from collections.abc import Iterable
from pathlib import Path

from stylecomplete.core.excludes import prunable_dirs

_BRACES = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives: ``*.{css,pcss}`` -> ``*.css``, ``*.pcss``."""
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def _match_parts(parts: tuple[str, ...], pattern_parts: tuple[str, ...]) -> bool:
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        # Zero or more whole segments
        return any(_match_parts(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatch(parts[0], head) and _match_parts(parts[1:], rest)


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Check if a posix relative path matches a glob pattern.

    Matching is per path segment: ``*`` never crosses ``/`` and a ``**``
    segment matches any number of directories, including none.
    """
    return _match_parts(tuple(rel_path.split("/")), tuple(pattern.split("/")))


class PathMatcher:
    """Matches workspace-relative paths against a set of file patterns."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self._patterns = [p for pattern in patterns for p in expand_braces(pattern)]

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def matches(self, rel_path: str | Path) -> bool:
        rel = Path(rel_path).as_posix()
        return any(matches_glob(rel, pattern) for pattern in self._patterns)


def find_files(
    root: Path,
    patterns: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Return sorted absolute paths under ``root`` matching any pattern."""
    matcher = PathMatcher(patterns)
    pruned = prunable_dirs(exclude_dirs)
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in-place: remove dirs we should skip
        dirnames[:] = [d for d in dirnames if d not in pruned]
        dir_path = Path(dirpath)
        for filename in filenames:
            file_path = dir_path / filename
            if matcher.matches(file_path.relative_to(root)):
                found.append(file_path)
    return sorted(found)


def is_pruned(rel_path: str | Path, exclude_dirs: Iterable[str] = ()) -> bool:
    """True if any directory component of ``rel_path`` is pruned."""
    pruned = prunable_dirs(exclude_dirs)
    return any(part in pruned for part in Path(rel_path).parent.parts)
