"""Scroll synchronization between editor and preview."""

from .controller import (
    ScrollSyncController,
    ScrollTarget,
    offset_for_fraction,
    scroll_fraction,
)

__all__ = [
    "ScrollSyncController",
    "ScrollTarget",
    "offset_for_fraction",
    "scroll_fraction",
]
