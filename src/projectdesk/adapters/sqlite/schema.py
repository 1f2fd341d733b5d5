"""SQLite schema definitions for the key-value table."""

CREATE_KV_STORE_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY NOT NULL,
    value TEXT NOT NULL
)
"""

ALL_TABLES = [CREATE_KV_STORE_TABLE]
