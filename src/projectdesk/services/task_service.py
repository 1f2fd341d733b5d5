"""Task service - Business logic for task operations."""

from __future__ import annotations

from projectdesk.exceptions import NotFoundError
from projectdesk.models import Task, TaskCreate, TaskUpdate, merge_record, utcnow
from projectdesk.repositories import Entity, RecordRepository
from projectdesk.services.project_service import generate_id
from projectdesk.utils.logger import get_logger

logger = get_logger()


class TaskService:
    """Service for task business logic, scoped to the calling owner."""

    def __init__(self, repository: RecordRepository):
        self.repository = repository

    async def list_tasks(self, owner_id: str, project_id: str | None = None) -> list[Task]:
        """List the owner's tasks, optionally only those of one project.

        An empty *project_id* means no project filter.
        """
        project_id = project_id or None
        tasks = await self.repository.list_by_owner(Entity.TASK, owner_id, project_id)
        logger.info(
            "retrieved %d tasks for user %s%s",
            len(tasks),
            owner_id,
            f" and project {project_id}" if project_id else "",
        )
        return tasks

    async def get_task(self, owner_id: str, task_id: str) -> Task:
        """Find one of the owner's tasks by id.

        Raises:
            NotFoundError: If no task with this id belongs to the owner
        """
        task = await self.repository.find_task(owner_id, task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def create_task(self, owner_id: str, data: TaskCreate) -> Task:
        """Create a task under one of the owner's projects.

        Raises:
            NotFoundError: If the parent project does not exist for this owner
        """
        project = await self.repository.get(Entity.PROJECT, owner_id, data.project_id)
        if project is None:
            raise NotFoundError("Project", data.project_id)

        now = utcnow()
        task = Task(
            **data.model_dump(),
            id=generate_id(),
            owner=owner_id,
            created_at=now,
            updated_at=now,
        )
        await self.repository.put(Entity.TASK, owner_id, task)
        logger.info(
            "created task %s for project %s and user %s", task.id, task.project_id, owner_id
        )
        return task

    async def update_task(self, owner_id: str, task_id: str, updates: TaskUpdate) -> Task:
        """Shallow-merge *updates* into an existing task.

        Raises:
            NotFoundError: If no task with this id belongs to the owner
        """
        existing = await self.get_task(owner_id, task_id)
        task = merge_record(existing, updates)
        await self.repository.put(Entity.TASK, owner_id, task)
        logger.info("updated task %s for user %s", task_id, owner_id)
        return task

    async def delete_task(self, owner_id: str, task_id: str) -> None:
        """Delete one task.

        Raises:
            NotFoundError: If no task with this id belongs to the owner
        """
        existing = await self.get_task(owner_id, task_id)
        await self.repository.delete(Entity.TASK, owner_id, task_id, existing.project_id)
        logger.info("deleted task %s for user %s", task_id, owner_id)
