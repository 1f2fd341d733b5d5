"""In-memory implementation of KeyValueStore."""

from __future__ import annotations

import copy
from typing import Any

from projectdesk.repositories import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway servers.

    Values are deep-copied in and out so callers can never mutate stored
    state through a returned document.
    """

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None):
        self._data: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def delete_many(self, keys: list[str]) -> int:
        return sum(1 for key in keys if self._data.pop(key, None) is not None)

    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(value)
            for key, value in self._data.items()
            if key.startswith(prefix)
        ]

    def keys(self) -> list[str]:
        """All stored keys, in insertion order."""
        return list(self._data)
