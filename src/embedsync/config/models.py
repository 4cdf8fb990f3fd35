"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (EMBEDSYNC__SECTION__KEY)
3. Repo YAML (.embed-sync.yaml in the root directory)
4. Global YAML (~/.config/embed-sync/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    EMBEDSYNC__<SECTION>__<KEY>=<VALUE>

Examples:
    EMBEDSYNC__LOGGING__LEVEL=DEBUG
    EMBEDSYNC__SYNC__ENCODING=utf-8-sig
"""

import codecs
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from embedsync.core.excludes import DEFAULT_EXCLUDED_DIRS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        EMBEDSYNC__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI raises it to DEBUG with -v.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SyncConfig(BaseModel):
    """Document discovery and rewrite settings.

    Env vars:
        EMBEDSYNC__SYNC__ENCODING: Encoding for documents and source files
    """

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read and write documents and sources.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_EXCLUDED_DIRS),
        description="Directory names never descended into when expanding patterns.",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v


class EmbedSyncConfig(BaseModel):
    """Root configuration for embed-sync."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
