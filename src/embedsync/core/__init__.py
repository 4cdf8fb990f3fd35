"""Core module exports."""

from embedsync.core.errors import (
    ConfigError,
    EmbedError,
    EmbedSyncError,
    ErrorCode,
    InternalError,
)
from embedsync.core.logging import (
    bound_document,
    configure_logging,
    get_logger,
)
from embedsync.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ConfigError",
    "EmbedError",
    "EmbedSyncError",
    "ErrorCode",
    "InternalError",
    # Logging
    "bound_document",
    "configure_logging",
    "get_logger",
    # Progress
    "pluralize",
    "progress",
    "status",
]
