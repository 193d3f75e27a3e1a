"""Capability adapters that let the session drive Textual widgets."""

from __future__ import annotations

from typing import Any, Optional

from textual.widgets.text_area import Selection

from md_engine.buffer import (
    ScrollMetrics,
    SelectionRange,
    location_for_offset,
    offset_for_location,
    split_lines,
)
from md_engine.session import ClipboardError


class TextualSurface:
    """``EditingSurface`` over a Textual scrollable widget.

    Pass a ``TextArea`` for the editor pane; any scrollable container works
    for the preview pane, which simply reports no selection.
    """

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    @property
    def editable(self) -> bool:
        return hasattr(self.widget, "selection") and hasattr(self.widget, "text")

    def get_selection(self) -> Optional[SelectionRange]:
        if not self.editable:
            return None
        lines = split_lines(self.widget.text)
        anchor, cursor = self.widget.selection
        first = offset_for_location(lines, tuple(anchor))
        second = offset_for_location(lines, tuple(cursor))
        return SelectionRange(min(first, second), max(first, second))

    def set_selection(self, selection: SelectionRange) -> None:
        if not self.editable:
            return
        lines = split_lines(self.widget.text)
        self.widget.selection = Selection(
            location_for_offset(lines, selection.start),
            location_for_offset(lines, selection.end),
        )

    def get_scroll_metrics(self) -> ScrollMetrics:
        viewport = float(self.widget.size.height)
        return ScrollMetrics(
            offset=float(self.widget.scroll_y),
            extent=float(self.widget.max_scroll_y) + viewport,
            viewport=viewport,
        )

    def set_scroll_offset(self, offset: float) -> None:
        self.widget.scroll_to(y=offset, animate=False)


class TextualClipboard:
    """Writes through the terminal (OSC 52); reads the app's local clipboard."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def read_text(self) -> str:
        text = getattr(self.app, "clipboard", None)
        if text is None:
            raise ClipboardError("clipboard is not readable in this terminal")
        return str(text)

    async def write_text(self, text: str) -> None:
        self.app.copy_to_clipboard(text)


__all__ = ["TextualClipboard", "TextualSurface"]
