"""Toolbar commands and the text mutation engine."""

from .defaults import DEFAULT_COMMANDS, load_default_commands
from .models import CommandKind, TextCommand
from .mutation import MutationResult, TextMutationEngine
from .registry import CommandConflictError, CommandRegistry, RegistryStats

__all__ = [
    "CommandKind",
    "TextCommand",
    "CommandRegistry",
    "CommandConflictError",
    "RegistryStats",
    "MutationResult",
    "TextMutationEngine",
    "DEFAULT_COMMANDS",
    "load_default_commands",
]
