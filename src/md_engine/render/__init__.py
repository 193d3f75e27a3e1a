"""Rendering pipeline and its markup/diagram collaborators."""

from .diagrams import (
    DiagramJob,
    DiagramRenderError,
    DiagramRenderer,
    MermaidDiagramRenderer,
    diagram_error_markup,
)
from .export import html_page
from .markup import MarkdownTransformer, MarkupTransformer, fence_language
from .pipeline import RenderedView, RenderPipeline, render_outline_block

__all__ = [
    "DiagramJob",
    "DiagramRenderError",
    "DiagramRenderer",
    "MermaidDiagramRenderer",
    "diagram_error_markup",
    "MarkdownTransformer",
    "MarkupTransformer",
    "fence_language",
    "html_page",
    "RenderedView",
    "RenderPipeline",
    "render_outline_block",
]
