"""SQLite implementation of KeyValueStore."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

from projectdesk.adapters.sqlite.connection import open_connection
from projectdesk.exceptions import StoreError
from projectdesk.repositories import KeyValueStore


class SqliteKeyValueStore(KeyValueStore):
    """Key-value store persisted in a single SQLite table.

    Values are stored as JSON text. Every sqlite error is re-raised as
    ``StoreError``.
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = open_connection(self.db_path)
            except (sqlite3.Error, RuntimeError) as e:
                raise StoreError(f"Cannot open key-value store: {e}") from e
        return self._connection

    async def get(self, key: str) -> dict[str, Any] | None:
        try:
            row = self.connection.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return json.loads(row["value"]) if row else None

    async def set(self, key: str, value: dict[str, Any]) -> None:
        try:
            self.connection.execute(
                """INSERT INTO kv_store (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, json.dumps(value)),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    async def delete(self, key: str) -> bool:
        try:
            cursor = self.connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            self.connection.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return cursor.rowcount > 0

    async def delete_many(self, keys: list[str]) -> int:
        if not keys:
            return 0
        placeholders = ", ".join("?" for _ in keys)
        try:
            cursor = self.connection.execute(
                f"DELETE FROM kv_store WHERE key IN ({placeholders})", keys
            )
            self.connection.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return cursor.rowcount

    async def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        # substr comparison avoids LIKE wildcard escaping of "_" and "%"
        try:
            rows = self.connection.execute(
                "SELECT value FROM kv_store WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return [json.loads(row["value"]) for row in rows]

    async def close(self) -> None:
        """Close the underlying connection."""
        if self._connection is not None:
            self._connection.commit()
            self._connection.close()
            self._connection = None
