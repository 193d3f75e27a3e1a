"""Bidirectional scroll mirroring between the editor and preview panes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from md_engine.buffer import Pane, ScrollMetrics, clamp_fraction
from md_engine.runtime import telemetry
from md_engine.runtime.timers import Clock, DeadlineTimer


@dataclass(frozen=True, slots=True)
class ScrollTarget:
    """Where the session should move ``pane`` to, as a fraction of its overflow."""

    pane: Pane
    fraction: float


def scroll_fraction(metrics: ScrollMetrics) -> float:
    """``offset / (extent - viewport)``, or 0 when the pane does not overflow."""

    overflow = metrics.overflow
    if overflow <= 0:
        return 0.0
    return clamp_fraction(metrics.offset / overflow)


def offset_for_fraction(metrics: ScrollMetrics, fraction: float) -> float:
    return clamp_fraction(fraction) * metrics.overflow


class ScrollSyncController:
    """Mirrors scroll positions without echo loops.

    Each pane owns a suppression flag. A scroll in pane A sets A's flag for
    ``window_ms``; while it is set, scroll events from pane B are treated as
    echoes of the sync A just caused and are dropped.
    """

    def __init__(
        self,
        *,
        window_ms: int = 100,
        clock: Optional[Clock] = None,
    ) -> None:
        self.window_ms = window_ms
        self.logger = telemetry.get_logger("md_engine.scroll")
        self._suppressed: Dict[Pane, bool] = {pane: False for pane in Pane}
        self._timers: Dict[Pane, DeadlineTimer] = {
            pane: DeadlineTimer(
                f"scroll_reset::{pane.value}",
                lambda pane=pane: self._release(pane),
                clock=clock,
            )
            for pane in Pane
        }

    def is_suppressed(self, pane: Pane | str) -> bool:
        return self._suppressed[Pane(pane)]

    def handle_scroll(self, source: Pane | str, fraction: float) -> Optional[ScrollTarget]:
        pane = Pane(source)
        if self._suppressed[pane.other]:
            self.logger.debug(f"scroll echo ignored pane={pane.value}")
            return None

        self._suppressed[pane] = True
        self._timers[pane].arm(self.window_ms)
        return ScrollTarget(pane=pane.other, fraction=clamp_fraction(fraction))

    def handle_metrics(
        self, source: Pane | str, metrics: ScrollMetrics
    ) -> Optional[ScrollTarget]:
        return self.handle_scroll(source, scroll_fraction(metrics))

    def process_timeouts(self) -> int:
        return sum(1 for timer in self._timers.values() if timer.poll())

    def reset(self) -> None:
        for pane, timer in self._timers.items():
            timer.cancel()
            self._suppressed[pane] = False

    def _release(self, pane: Pane) -> None:
        self._suppressed[pane] = False


__all__ = [
    "ScrollSyncController",
    "ScrollTarget",
    "offset_for_fraction",
    "scroll_fraction",
]
