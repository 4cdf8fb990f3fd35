"""Embed engine - directive scanning, extraction, resolution and rewriting."""

from embedsync.embed.cache import SourceCache
from embedsync.embed.models import (
    NO_CLOSE,
    Directive,
    DocumentResult,
    ErrorReport,
    Resolution,
    RewriteOutcome,
    RunSummary,
)
from embedsync.embed.ops import EmbedSync, expand_patterns, split_patterns
from embedsync.embed.resolver import Resolver
from embedsync.embed.rewrite import GENERATED_COMMENT, apply_embeds, render_block
from embedsync.embed.scanner import find_directives

__all__ = [
    "NO_CLOSE",
    "GENERATED_COMMENT",
    "Directive",
    "DocumentResult",
    "EmbedSync",
    "ErrorReport",
    "Resolution",
    "Resolver",
    "RewriteOutcome",
    "RunSummary",
    "SourceCache",
    "apply_embeds",
    "expand_patterns",
    "find_directives",
    "render_block",
    "split_patterns",
]
