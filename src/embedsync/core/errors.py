"""embed-sync error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Embed (per-directive, reported and skipped)
- 9xxx: Internal (fatal, abort the run)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Embed (3xxx)
    SOURCE_NOT_FOUND = 3001
    SYMBOL_NOT_FOUND = 3002
    UNTERMINATED_DECLARATION = 3003
    MARKER_MISMATCH = 3004
    UNSUPPORTED_KIND = 3005

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    GRAMMAR_UNAVAILABLE = 9002
    DOCUMENT_READ_ERROR = 9003


@dataclass(frozen=True)
class EmbedSyncError(Exception):
    """Base error with structured context for reports."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SYMBOL_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(EmbedSyncError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class EmbedError(EmbedSyncError):
    """A directive could not be resolved.

    Local to one directive: reported, never propagated past the rewrite engine.
    """

    @classmethod
    def source_not_found(cls, path: str) -> "EmbedError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"File not found: {path}",
            details={"path": path},
        )

    @classmethod
    def symbol_not_found(cls, symbol: str, path: str) -> "EmbedError":
        return cls(
            code=ErrorCode.SYMBOL_NOT_FOUND,
            message=f"Symbol '{symbol}' not found in {path}",
            details={"symbol": symbol, "path": path},
        )

    @classmethod
    def unterminated(cls, symbol: str, path: str) -> "EmbedError":
        return cls(
            code=ErrorCode.UNTERMINATED_DECLARATION,
            message=f"Unterminated declaration for '{symbol}' in {path}",
            details={"symbol": symbol, "path": path},
        )

    @classmethod
    def marker_mismatch(cls, offset: int) -> "EmbedError":
        return cls(
            code=ErrorCode.MARKER_MISMATCH,
            message=f"Opening marker no longer matches at offset {offset}",
            details={"offset": offset},
        )

    @classmethod
    def unsupported_kind(cls, kind: str) -> "EmbedError":
        return cls(
            code=ErrorCode.UNSUPPORTED_KIND,
            message=f"No extractor registered for '{kind}'",
            details={"kind": kind},
        )


class UnterminatedDeclarationError(Exception):
    """Raised by the lexical extractor when a brace scan runs off the end of the text."""

    def __init__(self, symbol: str, open_pos: int) -> None:
        self.symbol = symbol
        self.open_pos = open_pos
        super().__init__(f"No closing brace for '{symbol}' (opened at offset {open_pos})")


class InternalError(EmbedSyncError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )

    @classmethod
    def grammar_unavailable(cls, grammar: str, package: str) -> "InternalError":
        return cls(
            code=ErrorCode.GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar '{grammar}' is not installed (pip install {package})",
            details={"grammar": grammar, "package": package},
        )

    @classmethod
    def document_unreadable(cls, path: str, reason: str) -> "InternalError":
        return cls(
            code=ErrorCode.DOCUMENT_READ_ERROR,
            message=f"Cannot read document {path}: {reason}",
            details={"path": path, "reason": reason},
        )
