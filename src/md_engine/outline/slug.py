"""Heading text to anchor id conversion."""

from __future__ import annotations

import re

# ASCII word characters, whitespace, CJK unified ideographs, and hyphen survive.
_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s\u4e00-\u9fa5-]")
_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(text: str) -> str:
    """Return the anchor id for ``text``.

    Deterministic but not unique: two headings with the same text share an id.
    """

    lowered = text.lower()
    stripped = _DISALLOWED.sub("", lowered)
    return _WHITESPACE_RUN.sub("-", stripped)


__all__ = ["slugify"]
