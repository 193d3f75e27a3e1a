"""Storage slots and debounced saving."""

from .scheduler import PersistenceScheduler
from .storage import FileSlotStorage, MemoryStorage, Storage

__all__ = ["FileSlotStorage", "MemoryStorage", "PersistenceScheduler", "Storage"]
