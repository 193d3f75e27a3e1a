"""Named-slot storage for the raw document text."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from md_engine.runtime import telemetry
from md_engine.runtime.config import DEFAULT_SLOT


class Storage(Protocol):
    """A single slot holding the document verbatim.

    Implementations never raise for I/O trouble: ``load`` returns ``None``
    and ``save``/``clear`` return ``False``.
    """

    def load(self) -> Optional[str]:
        ...

    def save(self, text: str) -> bool:
        ...

    def clear(self) -> bool:
        ...


class FileSlotStorage:
    """Stores the slot as ``<directory>/<slot>.md`` in UTF-8."""

    def __init__(self, directory: Path | str, slot: str = DEFAULT_SLOT) -> None:
        if not slot or "/" in slot or "\\" in slot:
            raise ValueError(f"Invalid storage slot '{slot}'")
        self.directory = Path(directory)
        self.slot = slot
        self.logger = telemetry.get_logger("md_engine.persistence")

    @property
    def path(self) -> Path:
        return self.directory / f"{self.slot}.md"

    def load(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self._failed("load", exc)
            return None

    def save(self, text: str) -> bool:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".md.tmp")
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            self._failed("save", exc)
            return False
        return True

    def clear(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            self._failed("clear", exc)
            return False
        return True

    def _failed(self, operation: str, exc: BaseException) -> None:
        telemetry.record_event(
            "storage.failure",
            level="error",
            data={"operation": operation, "path": str(self.path), "error": str(exc)},
            logger_name="md_engine.persistence",
        )


class MemoryStorage:
    """In-process slot; ``fail`` makes every call report failure."""

    def __init__(self, text: Optional[str] = None, *, fail: bool = False) -> None:
        self.text = text
        self.fail = fail
        self.saves: list[str] = []

    def load(self) -> Optional[str]:
        if self.fail:
            return None
        return self.text

    def save(self, text: str) -> bool:
        if self.fail:
            return False
        self.text = text
        self.saves.append(text)
        return True

    def clear(self) -> bool:
        if self.fail:
            return False
        self.text = None
        return True


__all__ = ["FileSlotStorage", "MemoryStorage", "Storage"]
