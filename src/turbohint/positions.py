"""Offset to (line, column) mapping.

Lines are terminated by "\\n" or "\\r\\n"; a "\\r\\n" pair is one terminator
of width two. A lone "\\r" is an ordinary character. Lines and columns are
1-based.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

from .constants import LINE_TERMINATOR_PATTERN

_LINE_TERMINATOR = re.compile(LINE_TERMINATOR_PATTERN)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    line: int
    col: int


def fix_pos(event, offset: int) -> Position:
    """Position of the character `offset` characters into `event.raw`.

    The result is relative to the event's own start (`event.line`,
    `event.col`), so a rule can locate a character inside a text node
    without rescanning the document.
    """
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    # Offsets past the end of the raw text map to the position just after it.
    offset = min(offset, len(event.raw))
    text = event.raw[:offset]
    last = None
    count = 0
    for match in _LINE_TERMINATOR.finditer(text):
        last = match
        count += 1
    if last is None:
        return Position(event.line, event.col + offset)
    return Position(event.line + count, len(text) - last.end() + 1)


def line_starts(text: str) -> list[int]:
    """Offsets at which each line of `text` begins."""
    starts = [0]
    for match in _LINE_TERMINATOR.finditer(text):
        starts.append(match.end())
    return starts


def offset_to_position(text: str, offset: int, starts: list[int] | None = None) -> Position:
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    if starts is None:
        starts = line_starts(text)
    line = bisect_right(starts, offset)
    return Position(line, offset - starts[line - 1] + 1)


class LineTracker:
    """Running line state for a left-to-right pass over one document."""

    __slots__ = ("line", "line_start")

    def __init__(self):
        self.line = 1
        self.line_start = 0

    def reset(self):
        self.line = 1
        self.line_start = 0

    def position(self, pos):
        return Position(self.line, pos - self.line_start + 1)

    def advance(self, raw, pos):
        # `raw` starts at absolute offset `pos`.
        for match in _LINE_TERMINATOR.finditer(raw):
            self.line += 1
            self.line_start = pos + match.end()
