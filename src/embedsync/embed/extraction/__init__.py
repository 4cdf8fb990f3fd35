"""Declaration extractors, one per grammar kind.

Importing this package registers the built-in extractors:
``ts`` (structured, tree-sitter) and ``cs`` (lexical).
"""

from embedsync.embed.extraction.base import (
    BaseExtractor,
    build_extractors,
    register_extractor,
    registered_kinds,
)
from embedsync.embed.extraction.lexical import LexicalExtractor, extract_lexical
from embedsync.embed.extraction.structured import StructuredExtractor, extract_declaration

__all__ = [
    "BaseExtractor",
    "LexicalExtractor",
    "StructuredExtractor",
    "build_extractors",
    "extract_declaration",
    "extract_lexical",
    "register_extractor",
    "registered_kinds",
]
