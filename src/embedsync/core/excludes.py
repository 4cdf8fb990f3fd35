"""Canonical directory excludes for document pattern expansion.

A document path containing any of these directory names as a component is
never considered, even when a glob such as ``**/*.md`` matches it.
Users can replace the set through ``sync.exclude_dirs``.
"""

from __future__ import annotations

# =============================================================================
# VCS internals
# =============================================================================

VCS_DIRS: frozenset[str] = frozenset(
    (
        ".git",
        ".svn",
        ".hg",
        ".bzr",
    )
)

# =============================================================================
# Dependencies, caches, build outputs
# =============================================================================
# Third-party markdown (package READMEs, changelogs) lives here and must
# never be rewritten.

DEPENDENCY_DIRS: frozenset[str] = frozenset(
    (
        # JavaScript/TypeScript
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        ".next",
        ".turbo",
        "dist",
        # Python
        "venv",
        ".venv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        "site-packages",
        # .NET
        "bin",
        "obj",
        "packages",
    )
)

DEFAULT_EXCLUDED_DIRS: frozenset[str] = VCS_DIRS | DEPENDENCY_DIRS


def is_excluded(parts: tuple[str, ...], excluded: frozenset[str] | set[str]) -> bool:
    """Return True if any directory component of a path is excluded.

    ``parts`` is ``Path.parts``; the final component (the file name) is not
    checked.
    """
    return any(part in excluded for part in parts[:-1])
