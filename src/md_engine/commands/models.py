"""Dataclasses describing toolbar text commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CommandKind(str, Enum):
    INSERT = "insert"
    WRAP = "wrap"


@dataclass(frozen=True, slots=True)
class TextCommand:
    """A toolbar command: insert a snippet, or wrap the selection.

    For ``INSERT`` the inserted snippet is ``prefix + placeholder + suffix``.
    For ``WRAP`` the selection (or ``placeholder`` when nothing is selected)
    is enclosed between ``prefix`` and ``suffix``.
    """

    id: str
    kind: CommandKind
    prefix: str
    suffix: str = ""
    placeholder: str = ""
    title: str = ""
    group: str = "format"
    shortcut: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("command id cannot be empty")
        object.__setattr__(self, "kind", CommandKind(self.kind))

    @property
    def snippet(self) -> str:
        return self.prefix + self.placeholder + self.suffix

    @classmethod
    def insert(cls, id: str, text: str, **extra: str) -> "TextCommand":
        return cls(id=id, kind=CommandKind.INSERT, prefix=text, **extra)

    @classmethod
    def wrap(
        cls, id: str, prefix: str, suffix: str, placeholder: str, **extra: str
    ) -> "TextCommand":
        return cls(
            id=id,
            kind=CommandKind.WRAP,
            prefix=prefix,
            suffix=suffix,
            placeholder=placeholder,
            **extra,
        )


__all__ = ["CommandKind", "TextCommand"]
