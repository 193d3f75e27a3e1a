"""Document session wiring and host capabilities."""

from .host import (
    Clipboard,
    ClipboardError,
    DeclinePrompts,
    HostPrompts,
    MemoryClipboard,
    ScriptedPrompts,
    SessionHooks,
)
from .sample import SAMPLE_DOCUMENT
from .session import CLEAR_CONFIRMATION, DocumentSession

__all__ = [
    "CLEAR_CONFIRMATION",
    "Clipboard",
    "ClipboardError",
    "DeclinePrompts",
    "DocumentSession",
    "HostPrompts",
    "MemoryClipboard",
    "SAMPLE_DOCUMENT",
    "ScriptedPrompts",
    "SessionHooks",
]
