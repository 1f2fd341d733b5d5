"""Initial database schema migration: the kv_store table."""

import sqlite3

from projectdesk.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create the key-value table."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial key-value schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables."""
        for statement in schema.ALL_TABLES:
            connection.execute(statement)


initial_migration = InitialSchemaMigration()
