"""Outline extraction, markup rendering, and outline/diagram splicing."""

from __future__ import annotations

import asyncio
import html
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from md_engine.outline import HeadingEntry, OutlineExtractor
from md_engine.runtime import telemetry

from .diagrams import (
    DiagramJob,
    DiagramRenderer,
    MermaidDiagramRenderer,
    diagram_error_markup,
)
from .markup import MarkdownTransformer, MarkupTransformer, source_lines


@dataclass(frozen=True, slots=True)
class RenderedView:
    html: str
    outline: Tuple[HeadingEntry, ...]
    has_outline_marker: bool
    diagrams: Tuple[DiagramJob, ...] = ()
    revision: int = 0
    source: str = ""

    @property
    def diagrams_pending(self) -> bool:
        return any(job.placeholder in self.html for job in self.diagrams)


def render_outline_block(headings: Sequence[HeadingEntry], title: str = "Contents") -> str:
    if not headings:
        return ""
    links = "".join(
        f'<a href="#{html.escape(entry.id)}" '
        f'class="toc-link toc-level-{entry.level}" '
        f'style="padding-left: {entry.level - 1}em">{html.escape(entry.text)}</a>'
        for entry in headings
    )
    return (
        '<div class="toc-container">'
        f'<div class="toc-title">{html.escape(title)}</div>'
        f'<nav class="toc-nav">{links}</nav>'
        "</div>\n"
    )


class RenderPipeline:
    """Turns buffer text into a ``RenderedView``.

    The outline block replaces the marker out-of-band: every marker occurrence
    is removed from the text the transformer sees and a single block is
    placed ahead of the rendered document.
    """

    def __init__(
        self,
        *,
        extractor: Optional[OutlineExtractor] = None,
        transformer: Optional[MarkupTransformer] = None,
        diagram_renderer: Optional[DiagramRenderer] = None,
        outline_title: str = "Contents",
    ) -> None:
        self.extractor = extractor or OutlineExtractor()
        self.transformer = transformer or MarkdownTransformer()
        self.diagram_renderer = diagram_renderer or MermaidDiagramRenderer()
        self.outline_title = outline_title
        self.logger = telemetry.get_logger("md_engine.render")

    def render(self, text: str, *, revision: int = 0) -> RenderedView:
        with telemetry.span(
            "render::document",
            logger_name="md_engine.render",
            component="render",
            metadata={"revision": revision, "chars": len(text)},
        ) as handle:
            outline = self.extractor.extract(text)
            # Anchors come from the unstripped lines so they match the outline ids.
            env: Dict[str, Any] = {"diagrams": [], "lines": source_lines(text)}
            body = self.transformer.render(outline.text_without_marker, env)
            prefix = ""
            if outline.has_outline_marker:
                prefix = render_outline_block(outline.headings, self.outline_title)
            diagrams = tuple(env.get("diagrams", ()))
            handle.add_metadata("headings", len(outline.headings))
            handle.add_metadata("diagrams", len(diagrams))
            return RenderedView(
                html=prefix + body,
                outline=outline.headings,
                has_outline_marker=outline.has_outline_marker,
                diagrams=diagrams,
                revision=revision,
                source=outline.text_without_marker,
            )

    async def resolve_diagrams(self, view: RenderedView) -> RenderedView:
        """Replace diagram placeholders; a failing diagram only affects itself."""

        if not view.diagrams:
            return view
        results = await asyncio.gather(
            *(self.diagram_renderer.render(job.source) for job in view.diagrams),
            return_exceptions=True,
        )
        markup = view.html
        for job, result in zip(view.diagrams, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                telemetry.record_event(
                    "render.diagram_failed",
                    level="warning",
                    data={"index": job.index, "error": str(result)},
                    logger_name="md_engine.render",
                )
                replacement = diagram_error_markup(str(result))
            else:
                replacement = result
            markup = markup.replace(job.placeholder, replacement, 1)
        return replace(view, html=markup)


__all__ = ["RenderPipeline", "RenderedView", "render_outline_block"]
