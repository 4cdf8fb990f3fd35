"""Lexical extraction for C# declarations.

There is no parse tree here: a header pattern finds the declaration, and a
comment/string-aware brace scan finds where it ends. Two patterns are tried
in order:

1. Type-level: ``class``, ``interface``, ``struct``, ``enum``, ``record`` or
   ``delegate`` followed by the symbol name.
2. Member fallback: a return type, the symbol name, optional generic
   parameters and a parameter list.

Both patterns accept leading ``///`` doc lines and start at the beginning of
a line, so mentions in ordinary comments or mid-expression never match.
"""

from __future__ import annotations

import re
from pathlib import Path

from embedsync.core.errors import UnterminatedDeclarationError
from embedsync.embed.extraction.base import BaseExtractor, register_extractor
from embedsync.embed.extraction.braces import find_matching_brace, find_unguarded

_TYPE_MODIFIERS = (
    "public|private|protected|internal|static|abstract|sealed|partial"
    "|async|virtual|override|readonly|new|unsafe|file"
)
_MEMBER_MODIFIERS = (
    "public|private|protected|internal|static|abstract|sealed|partial"
    "|async|virtual|override|new|unsafe|extern"
)
_TYPE_KEYWORDS = r"record\s+(?:class|struct)|class|interface|struct|enum|record|delegate"

# Statement keywords that can precede a call and look like a return type.
_NOT_A_TYPE = r"(?!(?:return|new|await|throw|else|yield|case|goto|using|var|in|is|as)\b)"

_DOC_LINES = r"(?:\s*///[^\n]*\n)*"
_ATTRIBUTE_LINES = r"(?:\s*\[[^\]]*\]\s*\n)*"


def _type_pattern(symbol_name: str) -> re.Pattern[str]:
    return re.compile(
        rf"({_DOC_LINES}{_ATTRIBUTE_LINES})"
        rf"^([ \t]*(?:(?:{_TYPE_MODIFIERS})\s+)*(?:{_TYPE_KEYWORDS})\s+"
        rf"{re.escape(symbol_name)}(?!\w)[^{{;]*)",
        re.MULTILINE,
    )


def _member_pattern(symbol_name: str) -> re.Pattern[str]:
    return re.compile(
        rf"({_DOC_LINES})"
        rf"^([ \t]*(?:(?:{_MEMBER_MODIFIERS})\s+)*"
        rf"{_NOT_A_TYPE}[\w<>\[\],.?][\w<>\[\],.? \t]*\s+"
        rf"{re.escape(symbol_name)}\s*(?:<[^>]*>)?\s*\([^)]*\)[^{{;]*)",
        re.MULTILINE,
    )


def _declaration_span(source: str, match: re.Match[str], symbol_name: str) -> str | None:
    text = match.group(0)
    start = match.start() + (len(text) - len(text.lstrip()))

    terminator = find_unguarded(source, start, "{;")
    if terminator is None:
        return None
    if source[terminator] == ";":
        return source[start : terminator + 1].rstrip()

    close = find_matching_brace(source, terminator)
    if close is None:
        raise UnterminatedDeclarationError(symbol_name, terminator)
    return source[start : close + 1].rstrip()


def extract_lexical(source: str, symbol_name: str) -> str | None:
    """Extract the first declaration of ``symbol_name`` from C# source text.

    Returns None when no header matches or no terminator follows it.

    Raises:
        UnterminatedDeclarationError: The declaration's body brace never closes.
    """
    match = _type_pattern(symbol_name).search(source)
    if match is None:
        match = _member_pattern(symbol_name).search(source)
    if match is None:
        return None
    return _declaration_span(source, match, symbol_name)


@register_extractor
class LexicalExtractor(BaseExtractor):
    """C# declarations, located by pattern and closed by brace matching."""

    kind = "cs"
    fence_language = "csharp"

    def extract(self, path: Path, symbol_name: str) -> str | None:
        source = self._cache.raw_text(path)
        if source is None:
            return None
        return extract_lexical(source, symbol_name)
