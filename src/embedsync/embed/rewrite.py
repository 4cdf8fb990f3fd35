"""Rewrite engine: replace every marker body in one document.

Directives are applied from the highest start offset to the lowest. A
replacement only changes text at or after its own marker, so the offsets of
every directive still to be processed remain valid against the mutated text.
"""

from __future__ import annotations

from pathlib import Path

from embedsync.core.errors import EmbedError
from embedsync.core.logging import get_logger
from embedsync.embed.models import Directive, ErrorReport, RewriteOutcome
from embedsync.embed.resolver import Resolver
from embedsync.embed.scanner import find_directives, open_marker_pattern

log = get_logger("embed.rewrite")

GENERATED_COMMENT = "// @generated by embed-sync - do not edit"


def render_block(directive: Directive, code: str, language: str) -> str:
    """The text placed right after the opening marker, ending with the close marker."""
    return "\n".join(
        [
            "```" + language,
            GENERATED_COMMENT,
            code,
            "```",
            directive.close_marker,
        ]
    )


def apply_embeds(content: str, document_path: Path, resolver: Resolver) -> RewriteOutcome:
    """Rewrite all directives in ``content``.

    Failed directives keep their marker and (possibly stale) body untouched
    and contribute one ``ErrorReport`` each; the rest are still rewritten.
    Running this on its own output changes nothing.
    """
    directives = find_directives(content, resolver.kinds)
    if not directives:
        return RewriteOutcome(output=content)

    log.debug("directives_found", count=len(directives))

    resolutions = [resolver.resolve(d, document_path) for d in directives]
    marker_re = open_marker_pattern(resolver.kinds)
    errors: list[ErrorReport] = []
    result = content

    for resolution in sorted(resolutions, key=lambda r: r.directive.start_index, reverse=True):
        directive = resolution.directive
        if resolution.error is not None:
            errors.append(ErrorReport.from_error(document_path, directive, resolution.error))
            continue

        opening = marker_re.match(result, directive.start_index)
        if opening is None or opening.group(1) != directive.kind:
            error = EmbedError.marker_mismatch(directive.start_index)
            errors.append(ErrorReport.from_error(document_path, directive, error))
            continue

        insert_at = opening.end()
        replace_end = directive.end_index if directive.has_close else insert_at
        block = render_block(
            directive,
            resolution.code or "",
            resolver.fence_language(directive.kind),
        )
        result = result[:insert_at] + "\n" + block + result[replace_end:]

    errors.sort(key=lambda e: e.line_number)
    return RewriteOutcome(output=result, directives=directives, errors=errors)
