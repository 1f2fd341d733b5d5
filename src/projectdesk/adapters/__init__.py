"""Storage adapters implementing the KeyValueStore port."""

from .memory import InMemoryKeyValueStore
from .sqlite import SqliteKeyValueStore

__all__ = ["InMemoryKeyValueStore", "SqliteKeyValueStore"]
