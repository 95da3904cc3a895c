"""Abstract key-value store backing the notification ledger.

Values are JSON-serializable.  Implementations raise StorageError when
the store is unavailable or a stored value cannot be decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*.  Missing keys are ignored."""

    @abstractmethod
    def update(self, key: str, fn: Callable[[Any | None], Any | None]) -> None:
        """Replace the value under *key* with ``fn(current)`` as one atomic step.

        No other reader-writer of this store can interleave between the
        read and the write.  When *fn* returns None nothing is written.
        """
