"""Extractor contract and kind registry.

Every grammar implements one ``BaseExtractor``: given a resolved source file
and a symbol name, return the declaration text or None. The directive's
kind tag selects the implementation; the scanner and rewrite engine never
look past this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from embedsync.embed.cache import SourceCache


class BaseExtractor(ABC):
    """Abstract base for per-grammar declaration extractors."""

    kind: ClassVar[str]  # marker tag: "<kind>-embed"
    fence_language: ClassVar[str]  # language tag on the generated code fence

    def __init__(self, cache: SourceCache) -> None:
        self._cache = cache

    @abstractmethod
    def extract(self, path: Path, symbol_name: str) -> str | None:
        """Return the declaration's source text, or None if not found.

        Raises:
            UnterminatedDeclarationError: Lexical extractors only, when the
                declaration's body never closes.
        """
        ...


_REGISTRY: dict[str, type[BaseExtractor]] = {}


def register_extractor(cls: type[BaseExtractor]) -> type[BaseExtractor]:
    """Class decorator adding an extractor under its ``kind``."""
    _REGISTRY[cls.kind] = cls
    return cls


def registered_kinds() -> tuple[str, ...]:
    return tuple(_REGISTRY)


def build_extractors(cache: SourceCache) -> dict[str, BaseExtractor]:
    """Instantiate every registered extractor against one cache."""
    return {kind: cls(cache) for kind, cls in _REGISTRY.items()}
