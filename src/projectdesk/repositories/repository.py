"""Storage port for ProjectDesk.

The record repository only depends on this interface. Concrete adapters
(SQLite, in-memory) live in ``projectdesk.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Abstract string-keyed durable map with prefix scanning.

    Values are JSON-compatible documents. Adapters wrap their native errors
    in ``StoreError``.
    """

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        """Get the value stored under *key*.

        Returns:
            The stored document, or None when the key is absent
        """
        raise NotImplementedError("KeyValueStore.get() must be implemented by adapter")

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any]) -> None:
        """Store *value* under *key*, replacing any previous value."""
        raise NotImplementedError("KeyValueStore.set() must be implemented by adapter")

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete *key*.

        Returns:
            True if the key existed
        """
        raise NotImplementedError(
            "KeyValueStore.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_many(self, keys: list[str]) -> int:
        """Delete several keys at once.

        Returns:
            Number of keys that existed
        """
        raise NotImplementedError(
            "KeyValueStore.delete_many() must be implemented by adapter"
        )

    @abstractmethod
    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        """Return every value whose key starts with *prefix*.

        Ordering is adapter-defined.
        """
        raise NotImplementedError(
            "KeyValueStore.get_by_prefix() must be implemented by adapter"
        )

    async def close(self) -> None:
        """Release any resources held by the store."""
