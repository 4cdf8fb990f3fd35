"""Directive scanning: find open/close marker pairs in a document."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from embedsync.embed.models import NO_CLOSE, Directive


@dataclass(frozen=True, slots=True)
class _OpenMarker:
    start: int
    end: int
    kind: str
    source_path: str
    symbol_name: str


def open_marker_pattern(kinds: Iterable[str]) -> re.Pattern[str]:
    """Compile the opening-marker regex for a set of kind tags.

    Groups: 1 = kind, 2 = source path (untrimmed), 3 = symbol name.
    """
    alternatives = "|".join(re.escape(k) for k in sorted(kinds, key=len, reverse=True))
    return re.compile(
        rf"<!--\s*({alternatives})-embed\s*:\s*([^#\r\n>]+)#(\S+?)\s*-->"
    )


def _default_kinds() -> tuple[str, ...]:
    from embedsync.embed.extraction import registered_kinds

    return registered_kinds()


def _find_close(content: str, close_tag: str, start: int, end: int) -> int:
    """Offset of the close tag for a body starting at ``start``, or -1.

    A close tag right after a closing fence line wins, so generated code that
    itself contains the close tag does not end the body early.
    """
    fenced = re.compile(
        r"^```[ \t]*\r?\n" + re.escape(close_tag), re.MULTILINE
    ).search(content, start, end)
    if fenced is not None:
        return fenced.end() - len(close_tag)
    return content.find(close_tag, start, end)


def find_directives(content: str, kinds: Iterable[str] | None = None) -> list[Directive]:
    """Find every directive in ``content``, in order of appearance.

    An opening marker only claims a closing marker that lies before the next
    opening marker, so a missing close never steals a later directive's.
    """
    pattern = open_marker_pattern(kinds if kinds is not None else _default_kinds())

    markers = [
        _OpenMarker(
            start=m.start(),
            end=m.end(),
            kind=m.group(1),
            source_path=m.group(2).strip(),
            symbol_name=m.group(3).strip(),
        )
        for m in pattern.finditer(content)
    ]

    directives: list[Directive] = []
    for i, marker in enumerate(markers):
        window_end = markers[i + 1].start if i + 1 < len(markers) else len(content)
        close_tag = f"<!-- /{marker.kind}-embed -->"
        close_at = _find_close(content, close_tag, marker.end, window_end)
        end_index = close_at + len(close_tag) if close_at != -1 else NO_CLOSE

        directives.append(
            Directive(
                kind=marker.kind,
                source_path=marker.source_path,
                symbol_name=marker.symbol_name,
                line_number=content.count("\n", 0, marker.start) + 1,
                start_index=marker.start,
                end_index=end_index,
            )
        )

    return directives
