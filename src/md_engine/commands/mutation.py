"""Cursor-aware text surgery for toolbar commands.

Everything here is value-in/value-out: callers hand over the current text and
selection and get back the proposed new text plus the selection to restore.
Nothing reaches into a widget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from md_engine.buffer import SelectionRange
from md_engine.runtime import telemetry

from .models import CommandKind, TextCommand


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Proposed buffer text and the selection to restore.

    ``selection`` is ``None`` when there was no cursor target to restore to.
    """

    text: str
    selection: Optional[SelectionRange]


class TextMutationEngine:
    def __init__(self, *, logger_name: str = "md_engine.commands") -> None:
        self.logger = telemetry.get_logger(logger_name)

    def apply(
        self,
        text: str,
        selection: Optional[SelectionRange],
        command: TextCommand,
    ) -> MutationResult:
        if selection is None:
            return self._append(text, command.snippet, command.id)

        clamped = selection.clamp(len(text))
        if clamped != selection:
            self.logger.debug(
                f"selection clamped command={command.id} "
                f"from={selection.start}:{selection.end} "
                f"to={clamped.start}:{clamped.end}"
            )

        if command.kind is CommandKind.WRAP:
            return _wrap(text, clamped, command)
        return _splice(text, clamped, command.snippet)

    def insert_text(
        self, text: str, selection: Optional[SelectionRange], payload: str
    ) -> MutationResult:
        """Replace the selection with ``payload`` and park the caret after it."""

        if selection is None:
            return self._append(text, payload, "insert_text")
        clamped = selection.clamp(len(text))
        return _splice(text, clamped, payload)

    def _append(self, text: str, payload: str, label: str) -> MutationResult:
        self.logger.debug(f"no cursor target, appending command={label}")
        return MutationResult(text=text + payload, selection=None)


def _splice(text: str, selection: SelectionRange, payload: str) -> MutationResult:
    start, end = selection.start, selection.end
    new_text = text[:start] + payload + text[end:]
    return MutationResult(
        text=new_text, selection=SelectionRange.caret(start + len(payload))
    )


def _wrap(text: str, selection: SelectionRange, command: TextCommand) -> MutationResult:
    start, end = selection.start, selection.end
    had_selection = not selection.is_caret
    middle = text[start:end] if had_selection else command.placeholder
    inserted = command.prefix + middle + command.suffix
    new_text = text[:start] + inserted + text[end:]

    if had_selection:
        # Focus lands right before the suffix; the range covers only the
        # original content so a second wrap encloses just that.
        inner_start = start + len(command.prefix)
        result = SelectionRange(inner_start, inner_start + len(middle))
    else:
        result = SelectionRange.caret(start + len(inserted))
    return MutationResult(text=new_text, selection=result)


__all__ = ["MutationResult", "TextMutationEngine"]
