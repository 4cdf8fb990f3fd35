"""Tree-sitter parsing: grammar packs and the parser wrapper."""

from embedsync.parsing.packs import TSX_PACK, TYPESCRIPT_PACK, LanguagePack, get_pack_for_ext
from embedsync.parsing.treesitter import ParseResult, TreeSitterParser

__all__ = [
    "LanguagePack",
    "ParseResult",
    "TSX_PACK",
    "TYPESCRIPT_PACK",
    "TreeSitterParser",
    "get_pack_for_ext",
]
