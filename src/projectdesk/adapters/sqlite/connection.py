"""Database connection setup for the SQLite key-value store."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from projectdesk.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

MEMORY_DATABASE = ":memory:"


def default_db_path() -> Path:
    """Location of the database when none is configured."""
    return Path(user_data_dir("projectdesk")) / "projectdesk.db"


def open_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open and migrate a connection.

    Args:
        db_path: Path to database file, ``":memory:"`` for a private
            in-memory database, or None for the default location.

    Returns:
        sqlite3.Connection with WAL mode and an up-to-date schema
    """
    if db_path is None:
        db_path = default_db_path()

    in_memory = str(db_path) == MEMORY_DATABASE
    is_new_database = False
    if not in_memory:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,  # handlers may run on different worker threads
        timeout=30.0,
    )
    connection.row_factory = sqlite3.Row
    if not in_memory:
        connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(db_path, 0o600)

    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection
