"""Tests for TaskService."""

from __future__ import annotations

import pytest

from projectdesk.exceptions import NotFoundError
from projectdesk.models import Priority, ProjectCreate, TaskCreate, TaskUpdate
from projectdesk.services.project_service import ProjectService
from projectdesk.services.task_service import TaskService


@pytest.fixture()
def service(repository):
    return TaskService(repository)


@pytest.mark.asyncio
async def test_create_task_defaults(service, repository):
    project = await ProjectService(repository).create_project(
        "alice-id", ProjectCreate(name="P")
    )

    task = await service.create_task("alice-id", TaskCreate(project_id=project.id, title="Survey"))

    assert task.owner == "alice-id"
    assert task.project_id == project.id
    assert task.status == "To Do"
    assert task.priority == Priority.MEDIUM
    assert task.description == ""


@pytest.mark.asyncio
async def test_create_task_requires_own_project(service, repository):
    project = await ProjectService(repository).create_project("bob-id", ProjectCreate(name="P"))

    with pytest.raises(NotFoundError, match="Project not found"):
        await service.create_task("alice-id", TaskCreate(project_id=project.id, title="x"))
    with pytest.raises(NotFoundError):
        await service.create_task("alice-id", TaskCreate(project_id="missing", title="x"))


@pytest.mark.asyncio
async def test_list_tasks_filters_by_project(service, repository):
    projects = ProjectService(repository)
    first = await projects.create_project("alice-id", ProjectCreate(name="A"))
    second = await projects.create_project("alice-id", ProjectCreate(name="B"))
    await service.create_task("alice-id", TaskCreate(project_id=first.id, title="1"))
    await service.create_task("alice-id", TaskCreate(project_id=second.id, title="2"))

    assert len(await service.list_tasks("alice-id")) == 2
    only_first = await service.list_tasks("alice-id", first.id)
    assert [t.title for t in only_first] == ["1"]
    assert await service.list_tasks("bob-id") == []
    assert len(await service.list_tasks("alice-id", "")) == 2


@pytest.mark.asyncio
async def test_update_task_merges(service, repository):
    project = await ProjectService(repository).create_project("alice-id", ProjectCreate(name="P"))
    task = await service.create_task(
        "alice-id", TaskCreate(project_id=project.id, title="Survey", assigned_to="ravi")
    )

    updated = await service.update_task("alice-id", task.id, TaskUpdate(status="Done"))

    assert updated.status == "Done"
    assert updated.assigned_to == "ravi"
    assert updated.updated_at > task.updated_at
    assert (await service.get_task("alice-id", task.id)).status == "Done"


@pytest.mark.asyncio
async def test_update_and_delete_missing_task(service):
    with pytest.raises(NotFoundError, match="Task not found"):
        await service.update_task("alice-id", "missing", TaskUpdate(title="x"))
    with pytest.raises(NotFoundError):
        await service.delete_task("alice-id", "missing")


@pytest.mark.asyncio
async def test_delete_task(service, repository, store):
    project = await ProjectService(repository).create_project("alice-id", ProjectCreate(name="P"))
    task = await service.create_task("alice-id", TaskCreate(project_id=project.id, title="x"))

    await service.delete_task("alice-id", task.id)

    assert await service.list_tasks("alice-id") == []
    assert store.keys() == [f"projects:alice-id:{project.id}"]
