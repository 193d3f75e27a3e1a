"""Command registry responsible for storing toolbar commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from md_engine.runtime.telemetry import span

from .models import TextCommand


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    command_count: int
    groups: tuple[str, ...]
    revision: int


class CommandConflictError(ValueError):
    """Raised when a shortcut is already claimed by another command."""

    def __init__(self, command: TextCommand, existing: TextCommand) -> None:
        super().__init__(
            f"Command '{command.id}' shortcut '{command.shortcut}' "
            f"conflicts with '{existing.id}'"
        )
        self.command = command
        self.existing = existing


class CommandRegistry:
    """Owns the toolbar command catalogue, keyed by id."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, TextCommand] = {}
        self._shortcuts: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, command_id: str) -> TextCommand:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def by_shortcut(self, shortcut: str) -> Optional[TextCommand]:
        command_id = self._shortcuts.get(shortcut.lower())
        return self._commands[command_id] if command_id else None

    def register(self, command: TextCommand, *, replace: bool = False) -> TextCommand:
        with span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ) as handle:
            existing = self._commands.get(command.id)
            if existing is not None and not replace:
                raise ValueError(f"Command '{command.id}' already registered")

            if command.shortcut:
                owner = self._shortcuts.get(command.shortcut.lower())
                if owner is not None and owner != command.id:
                    handle.add_metadata("conflict", owner)
                    raise CommandConflictError(command, self._commands[owner])

            if existing is not None:
                self._drop_shortcut(existing)
            self._commands[command.id] = command
            if command.shortcut:
                self._shortcuts[command.shortcut.lower()] = command.id
            self._revision += 1
            return command

    def unregister(self, command_id: str) -> Optional[TextCommand]:
        command = self._commands.pop(command_id, None)
        if command is None:
            return None
        self._drop_shortcut(command)
        self._revision += 1
        return command

    def iter_commands(self, group: Optional[str] = None) -> Iterator[TextCommand]:
        for command in self._commands.values():
            if group is None or command.group == group:
                yield command

    def stats(self) -> RegistryStats:
        groups = tuple(dict.fromkeys(cmd.group for cmd in self._commands.values()))
        return RegistryStats(
            command_count=len(self._commands),
            groups=groups,
            revision=self._revision,
        )

    def _drop_shortcut(self, command: TextCommand) -> None:
        if command.shortcut:
            self._shortcuts.pop(command.shortcut.lower(), None)


__all__ = ["CommandConflictError", "CommandRegistry", "RegistryStats"]
