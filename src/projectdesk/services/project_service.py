"""Project service - Business logic for project operations."""

from __future__ import annotations

import uuid
from datetime import timedelta

from projectdesk.exceptions import NotFoundError
from projectdesk.models import (
    Priority,
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    merge_record,
    utcnow,
)
from projectdesk.repositories import Entity, RecordRepository
from projectdesk.utils.logger import get_logger

logger = get_logger()


def generate_id() -> str:
    return str(uuid.uuid4())


def build_sample_projects(owner_id: str) -> list[Project]:
    """The two projects a new user starts with."""
    now = utcnow()
    return [
        Project(
            id=generate_id(),
            owner=owner_id,
            name="Website Redesign",
            description="Complete overhaul of company website with modern design",
            status=ProjectStatus.IN_PROGRESS,
            priority=Priority.HIGH,
            start_date=now.isoformat(),
            end_date=(now + timedelta(days=30)).isoformat(),
            budget=25000,
            tags=["web", "design"],
            progress=45,
            created_at=now,
            updated_at=now,
        ),
        Project(
            id=generate_id(),
            owner=owner_id,
            name="Mobile App Development",
            description="Create a mobile application for iOS and Android",
            status=ProjectStatus.PLANNING,
            priority=Priority.MEDIUM,
            start_date=(now + timedelta(days=7)).isoformat(),
            end_date=(now + timedelta(days=90)).isoformat(),
            budget=50000,
            tags=["mobile", "app"],
            progress=0,
            created_at=now,
            updated_at=now,
        ),
    ]


class ProjectService:
    """Service for project business logic.

    Every operation is scoped to ``owner_id``, the identity of the
    authenticated caller.
    """

    def __init__(self, repository: RecordRepository, *, seed_sample_projects: bool = True):
        """Initialize the project service.

        Args:
            repository: Record repository for data access
            seed_sample_projects: Provision sample projects for users with none
        """
        self.repository = repository
        self.seed_sample_projects = seed_sample_projects

    async def list_projects(self, owner_id: str) -> list[Project]:
        """List the owner's projects.

        A user with no projects at all is given the sample projects first,
        so the second call returns the same two records.
        """
        projects = await self.repository.list_by_owner(Entity.PROJECT, owner_id)
        logger.info("retrieved %d projects for user %s", len(projects), owner_id)

        if not projects and self.seed_sample_projects:
            projects = await self.ensure_sample_projects(owner_id)
        return projects

    async def ensure_sample_projects(self, owner_id: str) -> list[Project]:
        """Persist the sample projects if the owner has no projects.

        Returns:
            The owner's projects after provisioning
        """
        existing = await self.repository.list_by_owner(Entity.PROJECT, owner_id)
        if existing:
            return existing

        samples = build_sample_projects(owner_id)
        for project in samples:
            await self.repository.put(Entity.PROJECT, owner_id, project)
        logger.info("created %d sample projects for user %s", len(samples), owner_id)
        return samples

    async def get_project(self, owner_id: str, project_id: str) -> Project:
        """Get one of the owner's projects.

        Raises:
            NotFoundError: If the project does not exist for this owner
        """
        project = await self.repository.get(Entity.PROJECT, owner_id, project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def create_project(self, owner_id: str, data: ProjectCreate) -> Project:
        """Create a project; the server assigns id, owner and timestamps."""
        now = utcnow()
        project = Project(
            **data.model_dump(),
            id=generate_id(),
            owner=owner_id,
            created_at=now,
            updated_at=now,
        )
        await self.repository.put(Entity.PROJECT, owner_id, project)
        logger.info("created project %s for user %s", project.id, owner_id)
        return project

    async def update_project(
        self, owner_id: str, project_id: str, updates: ProjectUpdate
    ) -> Project:
        """Shallow-merge *updates* into an existing project.

        Raises:
            NotFoundError: If the project does not exist for this owner
        """
        existing = await self.get_project(owner_id, project_id)
        project = merge_record(existing, updates)
        await self.repository.put(Entity.PROJECT, owner_id, project)
        logger.info("updated project %s for user %s", project_id, owner_id)
        return project

    async def delete_project(self, owner_id: str, project_id: str) -> int:
        """Delete a project together with all of its tasks.

        Returns:
            Number of tasks removed with the project

        Raises:
            NotFoundError: If the project does not exist for this owner
        """
        await self.get_project(owner_id, project_id)
        await self.repository.delete(Entity.PROJECT, owner_id, project_id)
        removed = await self.repository.delete_project_tasks(owner_id, project_id)
        logger.info(
            "deleted project %s and %d tasks for user %s", project_id, removed, owner_id
        )
        return removed
