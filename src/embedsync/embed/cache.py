"""Per-run source caches.

One ``SourceCache`` lives for one run and is passed to the extractors
explicitly, so separate runs (and tests) never see each other's entries.
Entries are keyed by resolved absolute path and filled on first reference.
A failed read is cached as ``None``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from embedsync.core.logging import get_logger

if TYPE_CHECKING:
    from embedsync.parsing.treesitter import ParseResult

log = get_logger("embed.cache")


@dataclass
class SourceCache:
    """Raw source text (lexical grammars) and parse trees (structured grammars)."""

    encoding: str = "utf-8"
    _texts: dict[Path, str | None] = field(default_factory=dict, repr=False)
    _units: dict[Path, ParseResult | None] = field(default_factory=dict, repr=False)

    def raw_text(self, path: Path) -> str | None:
        """Return the file's text, or None if it cannot be read or decoded."""
        key = path.resolve()
        if key not in self._texts:
            try:
                with key.open(encoding=self.encoding, newline="") as f:
                    self._texts[key] = f.read()
            except (OSError, UnicodeDecodeError) as e:
                log.debug("source_unreadable", path=str(key), error=str(e))
                self._texts[key] = None
        return self._texts[key]

    def parsed_unit(
        self,
        path: Path,
        parse: Callable[[Path, bytes], ParseResult],
    ) -> ParseResult | None:
        """Return the cached parse of ``path``, parsing with ``parse`` on first use."""
        key = path.resolve()
        if key not in self._units:
            try:
                content = key.read_bytes()
            except OSError as e:
                log.debug("source_unreadable", path=str(key), error=str(e))
                self._units[key] = None
            else:
                unit = parse(key, content)
                if unit.error_count:
                    log.debug("parse_errors", path=str(key), errors=unit.error_count)
                self._units[key] = unit
        return self._units[key]

    def __len__(self) -> int:
        return len(self._texts) + len(self._units)
