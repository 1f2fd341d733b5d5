"""Record repository mapping projects and tasks onto a key-value store.

Ownership and parentage are encoded in the key itself::

    projects:<owner>:<project_id>
    tasks:<owner>:<project_id>:<task_id>

so scoping a query to one user (or one project) is a prefix scan. Keys are
only ever built from the owner identity passed in by the caller, which the
route layer takes from the authenticated user.
"""

from __future__ import annotations

from enum import StrEnum

from projectdesk.models import Project, Task
from projectdesk.repositories.repository import KeyValueStore
from projectdesk.utils.logger import get_logger

logger = get_logger()

SEPARATOR = ":"


class Entity(StrEnum):
    """Record kinds and their key namespace."""

    PROJECT = "projects"
    TASK = "tasks"


_MODELS: dict[Entity, type[Project] | type[Task]] = {
    Entity.PROJECT: Project,
    Entity.TASK: Task,
}


def _segment(value: str, what: str) -> str:
    if not value or SEPARATOR in value:
        raise ValueError(f"Invalid {what} for record key: {value!r}")
    return value


def project_prefix(owner_id: str) -> str:
    return f"{Entity.PROJECT}:{_segment(owner_id, 'owner')}:"


def project_key(owner_id: str, project_id: str) -> str:
    return project_prefix(owner_id) + _segment(project_id, "project id")


def task_prefix(owner_id: str, project_id: str | None = None) -> str:
    prefix = f"{Entity.TASK}:{_segment(owner_id, 'owner')}:"
    if project_id is not None:
        prefix += f"{_segment(project_id, 'project id')}:"
    return prefix


def task_key(owner_id: str, project_id: str, task_id: str) -> str:
    return task_prefix(owner_id, project_id) + _segment(task_id, "task id")


class RecordRepository:
    """Persist and look up owner-scoped project and task records."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def key_for(
        self,
        entity: Entity,
        owner_id: str,
        record_id: str,
        project_id: str | None = None,
    ) -> str:
        """Build the storage key of a record.

        Tasks need their parent *project_id*; it is ignored for projects.
        """
        if entity is Entity.PROJECT:
            return project_key(owner_id, record_id)
        if project_id is None:
            raise ValueError("A project id is required to build a task key")
        return task_key(owner_id, project_id, record_id)

    async def put(self, entity: Entity, owner_id: str, record: Project | Task) -> None:
        """Write *record* under its key. Last write wins."""
        if record.owner != owner_id:
            raise ValueError("Record owner does not match the requesting owner")
        project_id = record.project_id if isinstance(record, Task) else None
        key = self.key_for(entity, owner_id, record.id, project_id)
        await self.store.set(key, record.model_dump(mode="json"))

    async def get(
        self,
        entity: Entity,
        owner_id: str,
        record_id: str,
        project_id: str | None = None,
    ) -> Project | Task | None:
        """Exact-key lookup. Returns None when the record does not exist."""
        try:
            key = self.key_for(entity, owner_id, record_id, project_id)
        except ValueError:
            return None
        value = await self.store.get(key)
        if value is None:
            return None
        return _MODELS[entity].model_validate(value)

    async def list_by_owner(
        self,
        entity: Entity,
        owner_id: str,
        parent_id: str | None = None,
    ) -> list[Project] | list[Task]:
        """List the owner's records, optionally only the tasks of one project."""
        if entity is Entity.PROJECT:
            prefix = project_prefix(owner_id)
        elif parent_id is not None and (not parent_id or SEPARATOR in parent_id):
            return []
        else:
            prefix = task_prefix(owner_id, parent_id)
        model = _MODELS[entity]
        return [model.model_validate(value) for value in await self.store.get_by_prefix(prefix)]

    async def delete(
        self,
        entity: Entity,
        owner_id: str,
        record_id: str,
        project_id: str | None = None,
    ) -> bool:
        """Delete one record. Idempotent; returns whether it existed."""
        try:
            key = self.key_for(entity, owner_id, record_id, project_id)
        except ValueError:
            return False
        return await self.store.delete(key)

    async def delete_many(self, keys: list[str]) -> int:
        """Best-effort batch delete."""
        if not keys:
            return 0
        return await self.store.delete_many(keys)

    async def find_task(self, owner_id: str, task_id: str) -> Task | None:
        """Find a task by id alone.

        The id does not determine the key, so this scans every task the owner
        has. O(n) in the owner's task count.
        """
        for task in await self.list_by_owner(Entity.TASK, owner_id):
            if task.id == task_id:
                return task
        return None

    async def delete_project_tasks(self, owner_id: str, project_id: str) -> int:
        """Delete every task stored under a project's task prefix."""
        tasks = await self.list_by_owner(Entity.TASK, owner_id, project_id)
        keys = [task_key(owner_id, project_id, task.id) for task in tasks]
        deleted = await self.delete_many(keys)
        logger.debug(
            "cascade deleted %d tasks of project %s for user %s",
            deleted,
            project_id,
            owner_id,
        )
        return deleted
