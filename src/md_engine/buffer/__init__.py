"""Document revisions, selections, and widget capability types."""

from .document import (
    DocumentBuffer,
    Location,
    location_for_offset,
    offset_for_location,
    split_lines,
)
from .state import SelectionRange
from .sync import EditingSurface, Pane, ScrollMetrics
from .validation import clamp_fraction

__all__ = [
    "DocumentBuffer",
    "Location",
    "SelectionRange",
    "EditingSurface",
    "Pane",
    "ScrollMetrics",
    "clamp_fraction",
    "location_for_offset",
    "offset_for_location",
    "split_lines",
]
