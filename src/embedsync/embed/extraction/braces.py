"""Comment- and string-aware scanning over C-family source text.

The scanner is a small state machine. Exactly one mode is active at a time
and braces or terminators only count in ``ScanMode.CODE``.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum


class ScanMode(Enum):
    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"
    VERBATIM_STRING = "verbatim_string"


# Lead-ins that open a verbatim string, longest first: @"..." and the
# interpolated verbatim forms $@"..." / @$"...".
_VERBATIM_OPENERS = ('$@"', '@$"', '@"')


class LexicalScanner:
    """Walk source text yielding the offsets of characters that are plain code.

    Usage::

        scanner = LexicalScanner(source)
        for pos in scanner.code_positions(start):
            if source[pos] == "{":
                ...
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.mode = ScanMode.CODE
        self._quote = ""

    def code_positions(self, start: int = 0) -> Iterator[int]:
        """Yield each offset >= ``start`` whose character is outside comments and strings."""
        src = self.source
        n = len(src)
        i = start
        while i < n:
            ch = src[i]
            nxt = src[i + 1] if i + 1 < n else ""

            if self.mode is ScanMode.LINE_COMMENT:
                if ch == "\n":
                    self.mode = ScanMode.CODE
                i += 1
                continue

            if self.mode is ScanMode.BLOCK_COMMENT:
                if ch == "*" and nxt == "/":
                    self.mode = ScanMode.CODE
                    i += 2
                else:
                    i += 1
                continue

            if self.mode is ScanMode.VERBATIM_STRING:
                if ch == '"' and nxt == '"':
                    i += 2  # doubled quote is a literal quote
                elif ch == '"':
                    self.mode = ScanMode.CODE
                    i += 1
                else:
                    i += 1
                continue

            if self.mode is ScanMode.STRING:
                if ch == "\\":
                    i += 2
                elif ch == self._quote:
                    self.mode = ScanMode.CODE
                    i += 1
                else:
                    i += 1
                continue

            # ScanMode.CODE
            if ch == "/" and nxt == "/":
                self.mode = ScanMode.LINE_COMMENT
                i += 2
                continue
            if ch == "/" and nxt == "*":
                self.mode = ScanMode.BLOCK_COMMENT
                i += 2
                continue
            opener = next((o for o in _VERBATIM_OPENERS if src.startswith(o, i)), None)
            if opener is not None:
                self.mode = ScanMode.VERBATIM_STRING
                i += len(opener)
                continue
            if ch in ('"', "'"):
                self.mode = ScanMode.STRING
                self._quote = ch
                i += 1
                continue

            yield i
            i += 1


def find_matching_brace(source: str, open_pos: int) -> int | None:
    """Return the offset of the ``}`` matching the ``{`` at ``open_pos``.

    Returns None if the text ends before depth returns to zero.
    """
    depth = 0
    for pos in LexicalScanner(source).code_positions(open_pos):
        ch = source[pos]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return pos
    return None


def find_unguarded(source: str, start: int, chars: str) -> int | None:
    """Return the first offset >= ``start`` holding one of ``chars`` in plain code."""
    for pos in LexicalScanner(source).code_positions(start):
        if source[pos] in chars:
            return pos
    return None
