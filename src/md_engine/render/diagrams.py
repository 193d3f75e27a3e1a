"""Diagram sub-renderers for fenced diagram blocks."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Protocol


class DiagramRenderError(RuntimeError):
    """Raised by a diagram renderer that cannot produce markup."""


@dataclass(frozen=True, slots=True)
class DiagramJob:
    index: int
    language: str
    source: str

    @property
    def placeholder(self) -> str:
        return f'<div class="mermaid-container" data-diagram-index="{self.index}"></div>'


class DiagramRenderer(Protocol):
    async def render(self, source: str) -> str:
        """Return markup for ``source``; raise on failure."""
        ...


MERMAID_KEYWORDS = frozenset(
    {
        "graph",
        "flowchart",
        "sequenceDiagram",
        "classDiagram",
        "stateDiagram",
        "stateDiagram-v2",
        "erDiagram",
        "journey",
        "gantt",
        "pie",
        "quadrantChart",
        "requirementDiagram",
        "gitGraph",
        "mindmap",
        "timeline",
        "sankey-beta",
        "xychart-beta",
        "block-beta",
    }
)


class MermaidDiagramRenderer:
    """Emits ``<div class="mermaid">`` blocks for client-side Mermaid.

    Only the diagram header is checked; anything deeper is left to the
    browser-side renderer.
    """

    async def render(self, source: str) -> str:
        body = source.strip()
        if not body:
            raise DiagramRenderError("empty diagram")
        header = body.split(None, 1)[0]
        if header.startswith("%%"):
            header = _first_statement(body)
        if header not in MERMAID_KEYWORDS:
            raise DiagramRenderError(f"unknown diagram type '{header}'")
        return f'<div class="mermaid">\n{html.escape(source)}\n</div>'


def _first_statement(body: str) -> str:
    for line in body.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("%%"):
            return stripped.split(None, 1)[0]
    return ""


def diagram_error_markup(message: str) -> str:
    return (
        '<div class="mermaid-error">'
        f"<pre>Mermaid render error: {html.escape(message)}</pre>"
        "</div>"
    )


__all__ = [
    "DiagramJob",
    "DiagramRenderError",
    "DiagramRenderer",
    "MERMAID_KEYWORDS",
    "MermaidDiagramRenderer",
    "diagram_error_markup",
]
