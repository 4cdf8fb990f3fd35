"""Tree-sitter parsing for structured declaration extraction.

Parses a source file into a ``ParseResult`` that keeps the exact bytes the
tree was built from, so node byte offsets can be sliced back into text.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from embedsync.core.errors import InternalError
from embedsync.parsing.packs import TYPESCRIPT_PACK, LanguagePack, get_pack_for_ext


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree (not serializable)
    source: bytes
    language: str
    error_count: int
    root_node: Any  # Tree-sitter Node


@dataclass
class TreeSitterParser:
    """
    Tree-sitter parser bound to the grammars in ``parsing.packs``.

    Usage::

        parser = TreeSitterParser()
        result = parser.parse(Path("src/api.ts"), content)
        for child in result.root_node.named_children:
            ...
    """

    default_pack: LanguagePack = TYPESCRIPT_PACK
    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._languages = {}

    def _get_language(self, pack: LanguagePack) -> Any:
        """Get or load the tree-sitter Language for a pack.

        Raises:
            InternalError: The grammar package is not installed.
        """
        if pack.grammar_name in self._languages:
            return self._languages[pack.grammar_name]

        try:
            mod = importlib.import_module(pack.grammar_module)
            lang_fn = getattr(mod, pack.language_func or "language")
        except (ImportError, AttributeError) as err:
            raise InternalError.grammar_unavailable(
                pack.grammar_name, pack.grammar_package
            ) from err

        lang = tree_sitter.Language(lang_fn())
        self._languages[pack.grammar_name] = lang
        return lang

    def pack_for(self, path: Path) -> LanguagePack:
        return get_pack_for_ext(path.suffix.lstrip(".")) or self.default_pack

    def parse(self, path: Path, content: bytes | None = None) -> ParseResult:
        """
        Parse a file with Tree-sitter.

        Args:
            path: Path to file (used for grammar selection)
            content: File content as bytes. If None, reads from path.

        Returns:
            ParseResult with tree, source bytes and error info.
        """
        if content is None:
            content = path.read_bytes()

        pack = self.pack_for(path)
        self._parser.language = self._get_language(pack)
        tree = self._parser.parse(content)

        return ParseResult(
            tree=tree,
            source=content,
            language=pack.name,
            error_count=_count_errors(tree.root_node),
            root_node=tree.root_node,
        )


def _count_errors(root: Any) -> int:
    """Count ERROR and missing nodes; tree-sitter recovers instead of failing."""
    if not root.has_error:
        return 0
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count
