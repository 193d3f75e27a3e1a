"""Heading outline extraction and anchor slugs."""

from .extractor import (
    HEADING_PATTERN,
    HeadingEntry,
    OutlineExtractor,
    OutlineResult,
    extract,
    match_heading,
)
from .slug import slugify

__all__ = [
    "HEADING_PATTERN",
    "HeadingEntry",
    "OutlineExtractor",
    "OutlineResult",
    "extract",
    "match_heading",
    "slugify",
]
