"""Repository layer: the storage port and the record repository built on it."""

from .records import Entity, RecordRepository, project_key, task_key
from .repository import KeyValueStore

__all__ = [
    "Entity",
    "KeyValueStore",
    "RecordRepository",
    "project_key",
    "task_key",
]
