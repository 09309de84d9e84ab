"""Directory exclusion sets with tiered architecture.

Tier 0 (HARDCODED_DIRS): Never traversed, not user-configurable.
    - VCS internals, stylecomplete's own config directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Excluded by default.
    - Dependencies, caches, build outputs. Style files in these directories
      are vendored or generated and would only add noise to completions.
    - Users can add more names via ``files.exclude_dirs``.
"""

from __future__ import annotations

from collections.abc import Iterable

# =============================================================================
# Tier 0: HARDCODED - Never traverse, not user-configurable
# =============================================================================

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # stylecomplete config
        ".stylecomplete",
    )
)

# =============================================================================
# Tier 1: DEFAULT_PRUNABLE - Excluded by default
# =============================================================================

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JavaScript/Node.js ecosystem
        # -------------------------------------------------------------------------
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        ".next",  # Next.js build
        ".nuxt",  # Nuxt.js build
        ".turbo",  # Turborepo cache
        ".parcel-cache",
        ".svelte-kit",
        # -------------------------------------------------------------------------
        # Python ecosystem
        # -------------------------------------------------------------------------
        "venv",
        ".venv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        "site-packages",
        # -------------------------------------------------------------------------
        # Generic build/output directories
        # -------------------------------------------------------------------------
        "dist",
        "build",
        "out",
        "coverage",
        # -------------------------------------------------------------------------
        # IDE/Editor directories
        # -------------------------------------------------------------------------
        ".idea",
        ".vscode",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def prunable_dirs(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the full set of directory names to prune, plus user extras."""
    return PRUNABLE_DIRS | frozenset(extra)
