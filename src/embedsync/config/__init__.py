"""Config module exports."""

from embedsync.config.loader import load_config
from embedsync.config.models import (
    EmbedSyncConfig,
    LoggingConfig,
    LogOutputConfig,
    SyncConfig,
)

__all__ = [
    "load_config",
    "EmbedSyncConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SyncConfig",
]
