"""Selection ranges captured from an editing surface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Offsets ``[start, end)`` into one specific buffer revision."""

    start: int
    end: int

    @classmethod
    def caret(cls, offset: int) -> "SelectionRange":
        return cls(offset, offset)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return abs(self.end - self.start)

    def clamp(self, length: int) -> "SelectionRange":
        """Clamp both ends into ``[0, length]`` and order them."""

        upper = max(length, 0)
        start = min(max(self.start, 0), upper)
        end = min(max(self.end, 0), upper)
        if start > end:
            start, end = end, start
        return SelectionRange(start, end)
