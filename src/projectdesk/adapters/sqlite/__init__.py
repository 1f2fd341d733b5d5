"""SQLite adapter for the key-value store."""

from .kv_store import SqliteKeyValueStore

__all__ = ["SqliteKeyValueStore"]
