"""Capabilities a host UI lends to the session."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Iterable, List, Optional, Protocol

from md_engine.buffer import Pane
from md_engine.render import RenderedView
from md_engine.outline import HeadingEntry


class HostPrompts(Protocol):
    async def confirm(self, message: str) -> bool:
        ...

    async def prompt_text(
        self, message: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Return the entered text, or ``None`` if the user cancelled."""
        ...


class ClipboardError(RuntimeError):
    """Raised by clipboards that cannot read or write."""


class Clipboard(Protocol):
    async def read_text(self) -> str:
        ...

    async def write_text(self, text: str) -> None:
        ...


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class SessionHooks:
    """Outbound notifications; every hook defaults to a no-op."""

    rendered_view: Callable[[RenderedView], None] = _noop
    outline: Callable[[tuple[HeadingEntry, ...]], None] = _noop
    scroll_target: Callable[[Pane, float], None] = _noop
    status: Callable[[str], None] = _noop


class DeclinePrompts:
    """Headless prompts: confirmations are refused, text prompts cancelled."""

    async def confirm(self, message: str) -> bool:
        del message
        return False

    async def prompt_text(
        self, message: str, default: Optional[str] = None
    ) -> Optional[str]:
        del message, default
        return None


@dataclass
class ScriptedPrompts:
    """Replays canned answers in order and records every question asked."""

    confirmations: Iterable[bool] = ()
    answers: Iterable[Optional[str]] = ()
    asked: List[str] = field(default_factory=list)
    _confirmations: Deque[bool] = field(init=False)
    _answers: Deque[Optional[str]] = field(init=False)

    def __post_init__(self) -> None:
        self._confirmations = deque(self.confirmations)
        self._answers = deque(self.answers)

    async def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return self._confirmations.popleft() if self._confirmations else False

    async def prompt_text(
        self, message: str, default: Optional[str] = None
    ) -> Optional[str]:
        self.asked.append(message)
        if not self._answers:
            return None
        answer = self._answers.popleft()
        if answer == "" and default is not None:
            return default
        return answer


class MemoryClipboard:
    def __init__(self, text: str = "", *, fail: bool = False) -> None:
        self.text = text
        self.fail = fail

    async def read_text(self) -> str:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        return self.text

    async def write_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        self.text = text


__all__ = [
    "Clipboard",
    "ClipboardError",
    "DeclinePrompts",
    "HostPrompts",
    "MemoryClipboard",
    "ScriptedPrompts",
    "SessionHooks",
]
