"""Immutable document revisions and line/offset conversion helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

Location = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class DocumentBuffer:
    """One revision of the document source.

    Every edit produces a new value via ``replace``; nothing mutates a
    revision that has already been handed out.
    """

    text: str = ""
    revision: int = 0

    def replace(self, text: str) -> "DocumentBuffer":
        return DocumentBuffer(text=text, revision=self.revision + 1)

    def __len__(self) -> int:
        return len(self.text)

    def lines(self) -> Sequence[str]:
        return split_lines(self.text)


def split_lines(text: str) -> Sequence[str]:
    """Split on ``\\n`` keeping a trailing empty line, like a text widget does."""

    return tuple(text.split("\n"))


def offset_for_location(lines: Sequence[str], location: Location) -> int:
    if not lines:
        return 0
    row, col = location
    row = min(max(row, 0), len(lines) - 1)
    col = min(max(col, 0), len(lines[row]))
    offset = 0
    for index in range(row):
        offset += len(lines[index]) + 1  # newline
    return offset + col


def location_for_offset(lines: Sequence[str], offset: int) -> Location:
    if not lines:
        return (0, 0)
    running = 0
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, max(offset - running, 0))
        running += len(line) + 1
    return (len(lines) - 1, len(lines[-1]))
