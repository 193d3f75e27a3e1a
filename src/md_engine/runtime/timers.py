"""Deadline timers polled by the host event loop.

A timer is either idle or pending with a deadline. Re-arming a pending timer
replaces its deadline and bumps its generation, so a callback captured for an
older generation can never fire.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class PendingDeadline:
    deadline: float
    delay_ms: int
    generation: int


class DeadlineTimer:
    """Single-shot timer with explicit ``idle``/``pending`` states."""

    def __init__(
        self,
        name: str,
        callback: Callable[[], None],
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self.name = name
        self._callback = callback
        self._clock = clock or time.monotonic
        self._pending: Optional[PendingDeadline] = None
        self._generation = 0

    @property
    def state(self) -> str:
        return "idle" if self._pending is None else "pending"

    @property
    def pending(self) -> Optional[PendingDeadline]:
        return self._pending

    def arm(self, delay_ms: int) -> PendingDeadline:
        self._generation += 1
        self._pending = PendingDeadline(
            deadline=self._clock() + (delay_ms / 1000.0),
            delay_ms=delay_ms,
            generation=self._generation,
        )
        return self._pending

    def cancel(self) -> bool:
        was_pending = self._pending is not None
        self._pending = None
        return was_pending

    def poll(self) -> bool:
        """Fire the callback if the deadline has passed; return whether it fired."""

        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._fire(pending.generation)

    def fire_now(self) -> bool:
        pending = self._pending
        if pending is None:
            return False
        return self._fire(pending.generation)

    def _fire(self, generation: int) -> bool:
        pending = self._pending
        if pending is None or pending.generation != generation:
            return False
        self._pending = None
        self._callback()
        return True


class ManualClock:
    """Deterministic clock for hosts without a real event loop (and tests)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, milliseconds: float) -> float:
        self.now += milliseconds / 1000.0
        return self.now


__all__ = ["Clock", "DeadlineTimer", "ManualClock", "PendingDeadline"]
