"""Embed operations - pattern expansion, per-document sync, run aggregation.

Documents are processed one at a time. A document is only written when its
rewritten text differs from what is on disk, so a clean re-run leaves every
file (and its mtime) alone.
"""

from __future__ import annotations

import glob
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from embedsync.config.models import EmbedSyncConfig
from embedsync.core.errors import InternalError
from embedsync.core.excludes import is_excluded
from embedsync.core.logging import bound_document, get_logger
from embedsync.embed.cache import SourceCache
from embedsync.embed.models import DocumentResult, RunSummary
from embedsync.embed.resolver import Resolver
from embedsync.embed.rewrite import apply_embeds

log = get_logger("embed.ops")


def split_patterns(patterns: str | Sequence[str]) -> list[str]:
    """Split comma-separated glob patterns; accepts one string or several."""
    if isinstance(patterns, str):
        patterns = [patterns]
    return [p.strip() for chunk in patterns for p in chunk.split(",") if p.strip()]


def expand_patterns(
    patterns: str | Sequence[str],
    *,
    root: Path,
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Expand glob patterns to a de-duplicated list of absolute file paths.

    Relative patterns are matched against ``root``; ``**`` recurses. Order is
    first-seen, sorted within each pattern.
    """
    excluded = frozenset(exclude_dirs)
    seen: dict[Path, None] = {}

    for pattern in split_patterns(patterns):
        for match in sorted(glob.glob(pattern, root_dir=root, recursive=True)):
            path = (root / match).resolve()
            if not path.is_file():
                continue
            try:
                parts = path.relative_to(root.resolve()).parts
            except ValueError:
                parts = path.parts
            if is_excluded(parts, excluded):
                continue
            seen.setdefault(path, None)

    log.debug("patterns_expanded", patterns=list(split_patterns(patterns)), matched=len(seen))
    return list(seen)


class EmbedSync:
    """Embed sync operations over a set of documents.

    One instance is one run: it owns the source cache shared by every
    document it processes.
    """

    def __init__(
        self,
        config: EmbedSyncConfig | None = None,
        *,
        root: Path | None = None,
        cache: SourceCache | None = None,
    ) -> None:
        """Initialize a run.

        Args:
            config: Resolved configuration (defaults if None)
            root: Base directory for relative patterns (cwd if None)
            cache: Source cache to share; a fresh one is created if None
        """
        self._config = config or EmbedSyncConfig()
        self._root = (root or Path.cwd()).resolve()
        if cache is None:
            cache = SourceCache(encoding=self._config.sync.encoding)
        self._cache = cache
        self._resolver = Resolver(self._cache)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    def expand(self, patterns: str | Sequence[str]) -> list[Path]:
        return expand_patterns(
            patterns,
            root=self._root,
            exclude_dirs=self._config.sync.exclude_dirs,
        )

    def sync_document(self, path: Path, *, check: bool = False) -> DocumentResult:
        """Rewrite one document in place.

        Args:
            path: Document to process
            check: Compute the rewrite but never write

        Returns:
            DocumentResult; ``rewritten`` means the text changed (or would have)

        Raises:
            InternalError: The document itself cannot be read or written.
        """
        path = path.resolve()
        encoding = self._config.sync.encoding

        with bound_document(path):
            try:
                with path.open(encoding=encoding, newline="") as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise InternalError.document_unreadable(str(path), str(e)) from e

            outcome = apply_embeds(content, path, self._resolver)
            changed = outcome.output != content

            if changed and not check:
                try:
                    path.write_text(outcome.output, encoding=encoding, newline="")
                except OSError as e:
                    raise InternalError.unexpected(
                        f"cannot write {path}: {e}", path=str(path)
                    ) from e
                log.info("document_written", directives=len(outcome.directives))
            elif outcome.directives:
                log.debug("document_unchanged", directives=len(outcome.directives), stale=changed)

            return DocumentResult(
                path=path,
                directive_count=len(outcome.directives),
                rewritten=changed,
                errors=outcome.errors,
            )

    def run(
        self,
        documents: Iterable[Path],
        *,
        check: bool = False,
        on_document: Callable[[DocumentResult], None] | None = None,
    ) -> RunSummary:
        """Sync every document and aggregate the results.

        Directive errors are collected; an ``InternalError`` aborts the run.
        """
        summary = RunSummary(check=check)
        for path in documents:
            result = self.sync_document(path, check=check)
            summary.documents.append(result)
            if on_document is not None:
                on_document(result)

        log.info(
            "run_complete",
            documents=summary.documents_matched,
            updated=summary.documents_updated,
            directives=summary.total_directives,
            errors=len(summary.errors),
        )
        return summary
