"""Directive resolution: one directive in, extracted code or a structured error out."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from embedsync.core.errors import EmbedError, UnterminatedDeclarationError
from embedsync.core.logging import get_logger
from embedsync.embed.cache import SourceCache
from embedsync.embed.extraction import BaseExtractor, build_extractors
from embedsync.embed.models import Directive, Resolution

log = get_logger("embed.resolver")


class Resolver:
    """Resolve directives against the file system through one run's cache.

    Source paths are resolved against the directory of the document that
    holds the directive, never against the working directory.
    """

    def __init__(
        self,
        cache: SourceCache | None = None,
        extractors: Mapping[str, BaseExtractor] | None = None,
    ) -> None:
        self.cache = cache if cache is not None else SourceCache()
        if extractors is None:
            extractors = build_extractors(self.cache)
        self._extractors = dict(extractors)

    @property
    def kinds(self) -> tuple[str, ...]:
        return tuple(self._extractors)

    def fence_language(self, kind: str) -> str:
        extractor = self._extractors.get(kind)
        return extractor.fence_language if extractor is not None else kind

    def source_for(self, directive: Directive, document_path: Path) -> Path:
        return (document_path.parent / directive.source_path).resolve()

    def resolve(self, directive: Directive, document_path: Path) -> Resolution:
        extractor = self._extractors.get(directive.kind)
        if extractor is None:
            return Resolution.failed(directive, EmbedError.unsupported_kind(directive.kind))

        source = self.source_for(directive, document_path)
        if not source.is_file():
            log.info("source_missing", reference=directive.reference, path=str(source))
            return Resolution.failed(directive, EmbedError.source_not_found(str(source)))

        try:
            code = extractor.extract(source, directive.symbol_name)
        except UnterminatedDeclarationError as e:
            log.info("declaration_unterminated", reference=directive.reference, offset=e.open_pos)
            return Resolution.failed(
                directive, EmbedError.unterminated(directive.symbol_name, str(source))
            )

        if code is None:
            log.info("directive_failed", reference=directive.reference, line=directive.line_number)
            return Resolution.failed(
                directive, EmbedError.symbol_not_found(directive.symbol_name, str(source))
            )

        log.debug("directive_resolved", reference=directive.reference, chars=len(code))
        return Resolution.ok(directive, code)
