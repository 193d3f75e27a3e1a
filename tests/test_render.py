from __future__ import annotations

import asyncio
from typing import Dict, List

import pytest

from md_engine.outline import HeadingEntry
from md_engine.render import (
    DiagramRenderError,
    MarkdownTransformer,
    MermaidDiagramRenderer,
    RenderPipeline,
    fence_language,
    html_page,
    render_outline_block,
)

MERMAID_DOC = "# Flow\n\n```mermaid\ngraph TD\n  A --> B\n```\n\ntext\n"


class FailingRenderer:
    def __init__(self) -> None:
        self.calls: List[str] = []

    async def render(self, source: str) -> str:
        self.calls.append(source)
        if "boom" in source:
            raise DiagramRenderError("bad syntax")
        return f"<svg>{len(self.calls)}</svg>"


def make_pipeline(**kwargs) -> RenderPipeline:
    return RenderPipeline(**kwargs)


def test_headings_receive_outline_ids() -> None:
    view = make_pipeline().render("# Hello World\n\n## What's New?\n")

    assert '<h1 id="hello-world">Hello World</h1>' in view.html
    assert '<h2 id="whats-new">' in view.html
    assert [entry.id for entry in view.outline] == ["hello-world", "whats-new"]
    assert view.has_outline_marker is False
    assert "toc-container" not in view.html


def test_outline_block_replaces_marker() -> None:
    view = make_pipeline().render("[TOC]\n\n# One\n## Two\n", revision=4)

    assert view.html.startswith('<div class="toc-container">')
    assert "[TOC]" not in view.html
    assert '<a href="#one" class="toc-link toc-level-1" style="padding-left: 0em">One</a>' in view.html
    assert 'class="toc-link toc-level-2" style="padding-left: 1em"' in view.html
    assert view.revision == 4
    assert view.source == "\n\n# One\n## Two\n"


def test_marker_without_headings_renders_nothing() -> None:
    view = make_pipeline().render("[TOC]\n\nplain text\n")

    assert view.has_outline_marker is True
    assert "toc-container" not in view.html
    assert "<p>plain text</p>" in view.html


def test_outline_block_escapes_text() -> None:
    block = render_outline_block([HeadingEntry(1, "a <b>", "a-b")], title="Index")

    assert "a &lt;b&gt;" in block
    assert '<div class="toc-title">Index</div>' in block
    assert render_outline_block([]) == ""


def test_gfm_extensions_render() -> None:
    text = "| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~\n\n- [ ] todo\n- [x] done\n"

    html = make_pipeline().render(text).html

    assert "<table>" in html
    assert "<s>gone</s>" in html
    assert 'type="checkbox"' in html
    assert "task-list-item" in html


def test_math_blocks_are_kept() -> None:
    html = make_pipeline().render("$$\n\\frac{1}{2}\n$$\n\ninline $x$ math\n").html

    assert "math" in html
    assert "\\frac{1}{2}" in html


def test_raw_html_is_escaped() -> None:
    html = make_pipeline().render("<script>alert(1)</script>\n").html

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_known_language_is_highlighted_inline() -> None:
    html = make_pipeline().render("```python\ndef run():\n    return 1\n```\n").html

    assert 'class="language-python"' in html
    assert 'style="' in html
    assert "run" in html


def test_unknown_language_is_escaped_plain() -> None:
    html = make_pipeline().render("```nosuchlang\n<tag> & more\n```\n").html

    assert "&lt;tag&gt; &amp; more" in html
    assert 'style="' not in html


@pytest.mark.parametrize(
    ("info", "expected"),
    [("Mermaid", "mermaid"), ("python title=x", "python"), ("", ""), ("  js  ", "js")],
)
def test_fence_language(info: str, expected: str) -> None:
    assert fence_language(info) == expected


def test_mermaid_fence_becomes_placeholder() -> None:
    view = make_pipeline().render(MERMAID_DOC)

    assert len(view.diagrams) == 1
    job = view.diagrams[0]
    assert job.language == "mermaid"
    assert job.source == "graph TD\n  A --> B"
    assert job.placeholder in view.html
    assert view.diagrams_pending is True
    assert "<p>text</p>" in view.html


def test_resolve_diagrams_with_mermaid_renderer() -> None:
    pipeline = make_pipeline()
    view = pipeline.render(MERMAID_DOC)

    resolved = asyncio.run(pipeline.resolve_diagrams(view))

    assert '<div class="mermaid">\ngraph TD\n  A --&gt; B\n</div>' in resolved.html
    assert resolved.diagrams_pending is False
    assert resolved.outline == view.outline


def test_failing_diagram_only_affects_itself() -> None:
    renderer = FailingRenderer()
    pipeline = make_pipeline(diagram_renderer=renderer)
    text = "```mermaid\ngraph A\n```\n\n```mermaid\nboom\n```\n\n```mermaid\ngraph C\n```\n"
    view = pipeline.render(text)

    resolved = asyncio.run(pipeline.resolve_diagrams(view))

    assert len(renderer.calls) == 3
    assert resolved.html.count("<svg>") == 2
    assert "Mermaid render error: bad syntax" in resolved.html
    assert 'class="mermaid-error"' in resolved.html


def test_resolve_without_diagrams_returns_same_view() -> None:
    pipeline = make_pipeline()
    view = pipeline.render("plain\n")

    assert asyncio.run(pipeline.resolve_diagrams(view)) is view


@pytest.mark.parametrize(
    "source",
    ["", "   \n", "notADiagram\n  A --> B", "%% comment only"],
)
def test_mermaid_renderer_rejects_bad_sources(source: str) -> None:
    with pytest.raises(DiagramRenderError):
        asyncio.run(MermaidDiagramRenderer().render(source))


def test_mermaid_renderer_skips_comment_lines() -> None:
    markup = asyncio.run(
        MermaidDiagramRenderer().render("%% title\nsequenceDiagram\n  A->>B: hi")
    )

    assert markup.startswith('<div class="mermaid">')


def test_transformer_records_diagrams_in_env() -> None:
    env: Dict[str, object] = {}

    MarkdownTransformer().render("```mermaid\npie\n```\n", env)

    assert len(env["diagrams"]) == 1  # type: ignore[arg-type]


def test_html_page_wraps_view() -> None:
    pipeline = make_pipeline()
    plain = html_page(pipeline.render("# Doc\n"), title="A & B")
    with_diagram = html_page(pipeline.render(MERMAID_DOC))

    assert plain.startswith("<!DOCTYPE html>")
    assert "<title>A &amp; B</title>" in plain
    assert "mermaid.min.js" not in plain
    assert "mermaid.min.js" in with_diagram


def test_heading_containing_marker_keeps_outline_id() -> None:
    view = make_pipeline().render("[TOC]\n# Intro [TOC] notes\n")

    assert [entry.id for entry in view.outline] == ["intro-toc-notes"]
    assert 'href="#intro-toc-notes"' in view.html
    assert '<h1 id="intro-toc-notes">' in view.html


def test_lone_carriage_return_does_not_shift_anchors() -> None:
    html = make_pipeline().render("x\r# A\n# B\n").html

    assert '<h1 id="a">A</h1>' in html
    assert '<h1 id="b">B</h1>' in html


def test_crlf_document_anchors_follow_their_lines() -> None:
    view = make_pipeline().render("[TOC]\r\n# One\r\n\r\ntext\r\n## Two\r\n")

    assert [entry.id for entry in view.outline] == ["one", "two"]
    assert '<h1 id="one">One</h1>' in view.html
    assert '<h2 id="two">Two</h2>' in view.html


def test_transformer_splits_lines_when_env_has_none() -> None:
    env: Dict[str, object] = {}

    html = MarkdownTransformer().render("a\r# First\r\n# Second", env)

    assert env["lines"] == ["a", "# First", "# Second"]
    assert '<h1 id="first">First</h1>' in html
