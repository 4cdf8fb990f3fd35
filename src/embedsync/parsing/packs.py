"""LanguagePack registry for the tree-sitter grammars embed-sync parses.

Each pack carries the grammar install metadata (package, module, loader
function) and the file extensions it claims. ``get_pack_for_ext`` is the
lookup used by the parser; unknown extensions fall back to the kind's
default pack.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LanguagePack:
    """Tree-sitter configuration for a single grammar."""

    # -- Identity --
    name: str  # Canonical language name ("typescript", "tsx")
    grammar_name: str  # tree-sitter grammar key

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-typescript")
    grammar_module: str  # Python import ("tree_sitter_typescript")
    min_version: str
    # Non-standard function name (e.g. "language_typescript", "language_tsx")
    language_func: str | None = None

    # -- File detection --
    extensions: frozenset[str] = field(default_factory=frozenset)


TYPESCRIPT_PACK = LanguagePack(
    name="typescript",
    grammar_name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_typescript",
    extensions=frozenset({"ts", "mts", "cts", "js", "mjs", "cjs"}),
)

TSX_PACK = LanguagePack(
    name="tsx",
    grammar_name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_tsx",
    extensions=frozenset({"tsx", "jsx"}),
)

_ALL_PACKS: tuple[LanguagePack, ...] = (
    TYPESCRIPT_PACK,
    TSX_PACK,
)

# Extension -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (without leading dot)."""
    return _EXT_TO_PACK.get(ext.lower())
