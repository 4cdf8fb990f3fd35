"""Structured extraction for TypeScript via tree-sitter.

Only top-level statements are considered, plus the direct statements of a
top-level namespace when the symbol is written ``Namespace.Symbol``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from embedsync.core.logging import get_logger
from embedsync.embed.cache import SourceCache
from embedsync.embed.extraction.base import BaseExtractor, register_extractor
from embedsync.parsing.treesitter import ParseResult, TreeSitterParser

log = get_logger("embed.structured")

# Statements that declare a name through their ``name`` field.
_NAMED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "internal_module",
        "module",
    }
)

_NAMESPACES = frozenset({"internal_module", "module"})

_VARIABLE_STATEMENTS = frozenset({"lexical_declaration", "variable_declaration"})

# Wrappers looked through to find the declaration; the wrapper's own span
# (``export``, ``declare``) stays part of the extracted text.
_WRAPPERS = frozenset({"export_statement", "ambient_declaration", "expression_statement"})

_NAME_NODE_TYPES = frozenset({"identifier", "type_identifier"})

_COMMENT_PREFIXES = ("*", "/")


def _unwrap(node: Any) -> Any:
    while node.type in _WRAPPERS:
        inner = node.child_by_field_name("declaration") if node.type == "export_statement" else None
        if inner is None:
            inner = next(
                (c for c in node.named_children if c.type not in ("comment", "decorator")),
                None,
            )
        if inner is None:
            return node
        node = inner
    return node


def _declared_name(source: bytes, node: Any) -> str | None:
    """Name declared by a statement, or None for anything unnamed or unsupported."""
    decl = _unwrap(node)

    name_node = None
    if decl.type in _NAMED_DECLARATIONS:
        name_node = decl.child_by_field_name("name")
    elif decl.type in _VARIABLE_STATEMENTS:
        # Only the first declarator of ``const a = 1, b = 2`` is addressable.
        first = next((c for c in decl.named_children if c.type == "variable_declarator"), None)
        if first is not None:
            name_node = first.child_by_field_name("name")

    if name_node is None or name_node.type not in _NAME_NODE_TYPES:
        return None
    return source[name_node.start_byte : name_node.end_byte].decode("utf-8")


def _statements(container: Any, gap_start: int) -> Iterator[tuple[Any, int]]:
    """Yield ``(statement, full_start)`` for each statement of a container.

    ``full_start`` is where the statement's leading trivia begins: the end of
    the previous statement, or ``gap_start`` for the first one. Comment nodes
    are trivia, not statements.
    """
    prev_end = gap_start
    for child in container.named_children:
        if child.type == "comment":
            continue
        yield child, prev_end
        prev_end = child.end_byte


def _node_text(source: bytes, node: Any, full_start: int) -> str:
    leading = source[full_start : node.start_byte].decode("utf-8", errors="replace")
    comment_lines = [
        line.rstrip()
        for line in leading.split("\n")
        if line.strip().startswith(_COMMENT_PREFIXES)
    ]
    body = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace").rstrip()
    if comment_lines:
        return "\n".join(comment_lines) + "\n" + body
    return body


def extract_declaration(source: bytes, root: Any, symbol_name: str) -> str | None:
    """Find ``symbol_name`` among the top-level statements under ``root``.

    ``Outer.Inner`` is looked up one level inside namespace ``Outer``; deeper
    paths never match. The first matching statement wins.
    """
    for stmt, full_start in _statements(root, 0):
        name = _declared_name(source, stmt)
        if name == symbol_name:
            return _node_text(source, stmt, full_start)

        decl = _unwrap(stmt)
        if name is None or decl.type not in _NAMESPACES:
            continue
        if not symbol_name.startswith(name + "."):
            continue

        inner_name = symbol_name[len(name) + 1 :]
        body = decl.child_by_field_name("body")
        if body is None:
            continue
        # Skip the block's opening brace so it never lands in the first gap.
        for inner, inner_start in _statements(body, body.start_byte + 1):
            if _declared_name(source, inner) == inner_name:
                return _node_text(source, inner, inner_start)

    return None


@register_extractor
class StructuredExtractor(BaseExtractor):
    """TypeScript declarations, located through a tree-sitter parse."""

    kind = "ts"
    fence_language = "ts"

    def __init__(self, cache: SourceCache, parser: TreeSitterParser | None = None) -> None:
        super().__init__(cache)
        self._parser = parser or TreeSitterParser()

    def _parse(self, path: Path, content: bytes) -> ParseResult:
        return self._parser.parse(path, content)

    def extract(self, path: Path, symbol_name: str) -> str | None:
        unit = self._cache.parsed_unit(path, self._parse)
        if unit is None:
            return None
        text = extract_declaration(unit.source, unit.root_node, symbol_name)
        if text is None:
            log.debug(
                "symbol_missing",
                path=str(path),
                symbol=symbol_name,
                statements=unit.root_node.named_child_count,
            )
        return text
