"""Heading outline extraction and outline-marker handling."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from md_engine.runtime.config import DEFAULT_OUTLINE_MARKER

from .slug import slugify

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")


@dataclass(frozen=True, slots=True)
class HeadingEntry:
    level: int
    text: str
    id: str


@dataclass(frozen=True, slots=True)
class OutlineResult:
    headings: Tuple[HeadingEntry, ...]
    has_outline_marker: bool
    text_without_marker: str


def match_heading(line: str) -> Optional[HeadingEntry]:
    """Return the heading described by ``line`` or ``None``."""

    if line.endswith("\r"):
        line = line[:-1]
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    text = match.group(2).strip()
    if not text:
        return None
    return HeadingEntry(level=len(match.group(1)), text=text, id=slugify(text))


class OutlineExtractor:
    """Scans a whole document for ATX heading lines.

    Runs from scratch on every change; headings inside fenced code are not
    special-cased, so the outline mirrors every line that looks like a heading.
    """

    def __init__(self, *, marker: str = DEFAULT_OUTLINE_MARKER) -> None:
        if not marker:
            raise ValueError("marker cannot be empty")
        if "\n" in marker or "\r" in marker:
            raise ValueError("marker must fit on one line")
        self.marker = marker

    def extract(self, text: str) -> OutlineResult:
        headings = tuple(
            entry
            for entry in (match_heading(line) for line in text.split("\n"))
            if entry is not None
        )
        has_marker = self.marker in text
        stripped = text.replace(self.marker, "") if has_marker else text
        return OutlineResult(
            headings=headings,
            has_outline_marker=has_marker,
            text_without_marker=stripped,
        )


def extract(text: str, *, marker: str = DEFAULT_OUTLINE_MARKER) -> OutlineResult:
    return OutlineExtractor(marker=marker).extract(text)


__all__ = [
    "HEADING_PATTERN",
    "HeadingEntry",
    "OutlineExtractor",
    "OutlineResult",
    "extract",
    "match_heading",
]
