"""Engine settings and ``MD_ENGINE_*`` environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

ENV_PREFIX = "MD_ENGINE_"
DEFAULT_SLOT = "markdown-editor-content"
DEFAULT_OUTLINE_MARKER = "[TOC]"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _default_storage_dir() -> Path:
    base = os.getenv("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
    return Path(base) / "md_engine"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables shared by the session and its collaborators."""

    save_delay_ms: int = 1000
    scroll_window_ms: int = 100
    storage_dir: Path = field(default_factory=_default_storage_dir)
    storage_slot: str = DEFAULT_SLOT
    outline_marker: str = DEFAULT_OUTLINE_MARKER
    highlight_style: str = "default"

    def __post_init__(self) -> None:
        if self.save_delay_ms < 0:
            raise ValueError("save_delay_ms cannot be negative")
        if self.scroll_window_ms < 0:
            raise ValueError("scroll_window_ms cannot be negative")
        if not self.storage_slot:
            raise ValueError("storage_slot cannot be empty")
        if not self.outline_marker:
            raise ValueError("outline_marker cannot be empty")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from ``MD_ENGINE_*`` variables, falling back to defaults."""

        defaults = cls()
        storage_dir = env("STORAGE_DIR")
        return cls(
            save_delay_ms=env_int("SAVE_DELAY_MS", defaults.save_delay_ms),
            scroll_window_ms=env_int("SCROLL_WINDOW_MS", defaults.scroll_window_ms),
            storage_dir=Path(storage_dir).expanduser()
            if storage_dir
            else defaults.storage_dir,
            storage_slot=env("STORAGE_SLOT") or defaults.storage_slot,
            outline_marker=env("OUTLINE_MARKER") or defaults.outline_marker,
            highlight_style=env("HIGHLIGHT_STYLE") or defaults.highlight_style,
        )

    def with_overrides(self, **changes: object) -> "EngineSettings":
        values = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **values)


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_SLOT",
    "DEFAULT_OUTLINE_MARKER",
    "EngineSettings",
    "env",
    "env_flag",
    "env_int",
]
