"""Debounced persistence of the buffer-of-record."""

from __future__ import annotations

from typing import Optional

from md_engine.runtime import telemetry
from md_engine.runtime.timers import Clock, DeadlineTimer

from .storage import Storage


class PersistenceScheduler:
    """Coalesces buffer changes into one delayed ``storage.save``.

    Changes are ignored until ``establish`` records the session's starting
    text, so loading a document never writes it straight back.
    """

    def __init__(
        self,
        storage: Storage,
        *,
        delay_ms: int = 1000,
        clock: Optional[Clock] = None,
    ) -> None:
        self.storage = storage
        self.delay_ms = delay_ms
        self.logger = telemetry.get_logger("md_engine.persistence")
        self._timer = DeadlineTimer("persistence::save", self._save, clock=clock)
        self._latest: Optional[str] = None
        self._established = False
        self.save_count = 0

    @property
    def pending(self) -> bool:
        return self._timer.state == "pending"

    @property
    def established(self) -> bool:
        return self._established

    def establish(self, text: str) -> None:
        self._timer.cancel()
        self._latest = text
        self._established = True

    def notify_change(self, text: str) -> None:
        if not self._established:
            self.logger.debug("change before establish ignored")
            return
        self._latest = text
        self._timer.arm(self.delay_ms)

    def process_timeouts(self) -> bool:
        return self._timer.poll()

    def cancel(self) -> bool:
        return self._timer.cancel()

    def shutdown(self) -> None:
        if self.cancel():
            telemetry.record_event(
                "persistence.dropped",
                level="warning",
                data={"delay_ms": self.delay_ms},
                logger_name="md_engine.persistence",
            )
        self._established = False

    def _save(self) -> None:
        text = self._latest if self._latest is not None else ""
        with telemetry.span(
            "persistence::save",
            logger_name="md_engine.persistence",
            component="persistence",
            metadata={"chars": len(text)},
        ) as handle:
            ok = self.storage.save(text)
            self.save_count += 1
            if not ok:
                handle.add_metadata("result", "failed")
                self.logger.warning("save failed; keeping in-memory buffer")


__all__ = ["PersistenceScheduler"]
