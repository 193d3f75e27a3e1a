"""Capability interfaces for syncing the engine with host widgets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .state import SelectionRange


class Pane(str, Enum):
    """The two independently scrollable panes of an editor session."""

    EDITOR = "editor"
    PREVIEW = "preview"

    @property
    def other(self) -> "Pane":
        return Pane.PREVIEW if self is Pane.EDITOR else Pane.EDITOR


@dataclass(frozen=True, slots=True)
class ScrollMetrics:
    """Scroll offset plus total and visible extents, in host units."""

    offset: float
    extent: float
    viewport: float

    @property
    def overflow(self) -> float:
        return max(self.extent - self.viewport, 0.0)


class EditingSurface(Protocol):
    """What the session needs from a live widget; only the session calls it."""

    def get_selection(self) -> Optional[SelectionRange]:
        """Return the live selection, or ``None`` if the widget has no cursor."""
        ...

    def set_selection(self, selection: SelectionRange) -> None:
        """Move the widget's selection/caret."""
        ...

    def get_scroll_metrics(self) -> ScrollMetrics:
        ...

    def set_scroll_offset(self, offset: float) -> None:
        ...
