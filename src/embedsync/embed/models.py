"""Embed data models.

Directive offsets always refer to the original, unmodified document text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from embedsync.core.errors import EmbedError, ErrorCode

NO_CLOSE = -1
"""Sentinel ``end_index``: no closing marker inside the directive's scan window."""


@dataclass(frozen=True, slots=True)
class Directive:
    """One open/close marker pair found in a document."""

    kind: str  # grammar tag: "ts", "cs", ...
    source_path: str  # document-relative, verbatim from the marker
    symbol_name: str  # possibly "Namespace.Symbol"
    line_number: int  # 1-based line of the opening marker
    start_index: int  # offset of the opening marker's first character
    end_index: int = NO_CLOSE  # offset just past the closing marker

    @property
    def tag(self) -> str:
        return f"{self.kind}-embed"

    @property
    def close_marker(self) -> str:
        return f"<!-- /{self.tag} -->"

    @property
    def has_close(self) -> bool:
        return self.end_index != NO_CLOSE

    @property
    def reference(self) -> str:
        return f"{self.source_path}#{self.symbol_name}"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one directive: extracted code or an error, never both."""

    directive: Directive
    code: str | None = None
    error: EmbedError | None = None

    def __post_init__(self) -> None:
        if (self.code is None) == (self.error is None):
            raise ValueError("Resolution needs exactly one of code or error")

    @classmethod
    def ok(cls, directive: Directive, code: str) -> Resolution:
        return cls(directive=directive, code=code)

    @classmethod
    def failed(cls, directive: Directive, error: EmbedError) -> Resolution:
        return cls(directive=directive, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """One directive failure, located well enough to fix the marker by hand."""

    document: str  # absolute document path
    line_number: int
    reason: str
    source_path: str
    symbol_name: str
    code: ErrorCode = ErrorCode.SYMBOL_NOT_FOUND

    @classmethod
    def from_error(cls, document: Path, directive: Directive, error: EmbedError) -> ErrorReport:
        return cls(
            document=str(document),
            line_number=directive.line_number,
            reason=error.message,
            source_path=directive.source_path,
            symbol_name=directive.symbol_name,
            code=error.code,
        )

    @property
    def reference(self) -> str:
        return f"{self.source_path}#{self.symbol_name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "line": self.line_number,
            "reason": self.reason,
            "reference": self.reference,
            "code": self.code.value,
            "error": self.code.name,
        }


@dataclass
class RewriteOutcome:
    """Result of rewriting one document's text."""

    output: str
    directives: list[Directive] = field(default_factory=list)
    errors: list[ErrorReport] = field(default_factory=list)


@dataclass
class DocumentResult:
    """Per-document summary."""

    path: Path
    directive_count: int
    rewritten: bool  # written, or in check mode: would be written
    errors: list[ErrorReport] = field(default_factory=list)


@dataclass
class RunSummary:
    """Aggregated summary of one run over many documents."""

    documents: list[DocumentResult] = field(default_factory=list)
    check: bool = False

    @property
    def documents_matched(self) -> int:
        return len(self.documents)

    @property
    def documents_touched(self) -> int:
        return sum(1 for d in self.documents if d.directive_count > 0)

    @property
    def documents_updated(self) -> int:
        return sum(1 for d in self.documents if d.rewritten)

    @property
    def total_directives(self) -> int:
        return sum(d.directive_count for d in self.documents)

    @property
    def errors(self) -> list[ErrorReport]:
        return [err for d in self.documents for err in d.errors]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        """0 when clean; 1 on any directive error, or stale docs in check mode."""
        if self.errors:
            return 1
        if self.check and self.documents_updated:
            return 1
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "documents_matched": self.documents_matched,
            "documents_touched": self.documents_touched,
            "documents_updated": self.documents_updated,
            "total_directives": self.total_directives,
            "errors": [err.to_dict() for err in self.errors],
            "check": self.check,
        }
