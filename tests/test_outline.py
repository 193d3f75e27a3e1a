from __future__ import annotations

import pytest

from md_engine.outline import (
    HEADING_PATTERN,
    HeadingEntry,
    OutlineExtractor,
    extract,
    slugify,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Title", "title"),
        ("Hello World", "hello-world"),
        ("What's New?", "whats-new"),
        ("a  b\tc", "a-b-c"),
        ("Already-hyphenated words", "already-hyphenated-words"),
        ("Café Menu", "caf-menu"),
        ("中文 标题", "中文-标题"),
        ("snake_case stays", "snake_case-stays"),
        ("", ""),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_slugify_is_deterministic_for_duplicates() -> None:
    assert slugify("Setup") == slugify("Setup")


def test_extract_scenario_document() -> None:
    result = extract("# Title\n\ntext\n## Sub\n")

    assert result.headings == (
        HeadingEntry(level=1, text="Title", id="title"),
        HeadingEntry(level=2, text="Sub", id="sub"),
    )
    assert result.has_outline_marker is False
    assert result.text_without_marker == "# Title\n\ntext\n## Sub\n"


def test_extract_rejects_non_headings() -> None:
    text = "\n".join(
        [
            "####### seven hashes",
            "#nospace",
            "#   ",
            " # indented",
            "text # not at start",
            "###### Six",
        ]
    )

    result = extract(text)

    assert [entry.level for entry in result.headings] == [6]
    assert result.headings[0].text == "Six"


def test_extract_trims_text_and_handles_crlf() -> None:
    result = extract("#   Spaced out   \r\nbody\r\n")

    assert result.headings == (HeadingEntry(1, "Spaced out", "spaced-out"),)


def test_duplicate_headings_share_ids() -> None:
    result = extract("# Notes\n## Notes\n")

    assert [entry.id for entry in result.headings] == ["notes", "notes"]


def test_heading_count_matches_pattern_lines() -> None:
    text = "# A\n```\n# inside fence\n```\n## B\nplain\n### C"

    result = extract(text)

    matching = [line for line in text.split("\n") if HEADING_PATTERN.match(line)]
    assert len(result.headings) == len(matching) == 4
    assert [entry.text for entry in result.headings] == ["A", "inside fence", "B", "C"]


def test_marker_detected_and_all_occurrences_stripped() -> None:
    result = extract("[TOC]\n# One\nsee [TOC] again")

    assert result.has_outline_marker is True
    assert result.text_without_marker == "\n# One\nsee  again"
    assert [entry.id for entry in result.headings] == ["one"]


def test_custom_marker() -> None:
    extractor = OutlineExtractor(marker="[[toc]]")

    result = extractor.extract("[[toc]]\n# One\n[TOC]")

    assert result.has_outline_marker is True
    assert result.text_without_marker == "\n# One\n[TOC]"


def test_empty_marker_rejected() -> None:
    with pytest.raises(ValueError):
        OutlineExtractor(marker="")


@pytest.mark.parametrize("marker", ["[TOC]\n", "a\rb"])
def test_multiline_marker_rejected(marker: str) -> None:
    with pytest.raises(ValueError):
        OutlineExtractor(marker=marker)
