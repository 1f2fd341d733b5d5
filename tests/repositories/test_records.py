"""Tests for the owner-scoped record repository."""

from __future__ import annotations

import pytest

from projectdesk.models import Project, Task, utcnow
from projectdesk.repositories import Entity, RecordRepository, project_key, task_key


def make_project(owner: str, project_id: str, name: str = "Project") -> Project:
    now = utcnow()
    return Project(id=project_id, owner=owner, name=name, created_at=now, updated_at=now)


def make_task(owner: str, project_id: str, task_id: str, title: str = "Task") -> Task:
    now = utcnow()
    return Task(
        id=task_id,
        owner=owner,
        project_id=project_id,
        title=title,
        created_at=now,
        updated_at=now,
    )


class TestKeys:
    def test_key_layout(self):
        assert project_key("alice", "p1") == "projects:alice:p1"
        assert task_key("alice", "p1", "t1") == "tasks:alice:p1:t1"

    @pytest.mark.parametrize("owner", ["", "ali:ce"])
    def test_invalid_segments_rejected(self, owner):
        with pytest.raises(ValueError):
            project_key(owner, "p1")

    def test_task_key_requires_project(self, repository):
        with pytest.raises(ValueError, match="project id is required"):
            repository.key_for(Entity.TASK, "alice", "t1")


@pytest.mark.asyncio
async def test_put_writes_under_owner_key(repository, store):
    await repository.put(Entity.PROJECT, "alice", make_project("alice", "p1"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t1"))

    assert store.keys() == ["projects:alice:p1", "tasks:alice:p1:t1"]


@pytest.mark.asyncio
async def test_put_rejects_foreign_record(repository, store):
    with pytest.raises(ValueError):
        await repository.put(Entity.PROJECT, "alice", make_project("bob", "p1"))
    assert store.keys() == []


@pytest.mark.asyncio
async def test_get_round_trips_model(repository):
    project = make_project("alice", "p1", "Depot")
    await repository.put(Entity.PROJECT, "alice", project)

    loaded = await repository.get(Entity.PROJECT, "alice", "p1")

    assert isinstance(loaded, Project)
    assert loaded == project


@pytest.mark.asyncio
async def test_get_missing_or_invalid_returns_none(repository):
    assert await repository.get(Entity.PROJECT, "alice", "nope") is None
    assert await repository.get(Entity.PROJECT, "alice", "p1:extra") is None


@pytest.mark.asyncio
async def test_list_by_owner_is_isolated(repository):
    await repository.put(Entity.PROJECT, "alice", make_project("alice", "p1"))
    await repository.put(Entity.PROJECT, "alice", make_project("alice", "p2"))
    await repository.put(Entity.PROJECT, "bob", make_project("bob", "p3"))
    # An owner id that is a prefix of another must not see its records
    await repository.put(Entity.PROJECT, "ali", make_project("ali", "p4"))

    alice = await repository.list_by_owner(Entity.PROJECT, "alice")
    ali = await repository.list_by_owner(Entity.PROJECT, "ali")

    assert sorted(p.id for p in alice) == ["p1", "p2"]
    assert [p.id for p in ali] == ["p4"]
    assert await repository.list_by_owner(Entity.PROJECT, "carol") == []


@pytest.mark.asyncio
async def test_list_tasks_by_project(repository):
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t1"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t2"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p2", "t3"))

    all_tasks = await repository.list_by_owner(Entity.TASK, "alice")
    p1_tasks = await repository.list_by_owner(Entity.TASK, "alice", "p1")

    assert len(all_tasks) == 3
    assert sorted(t.id for t in p1_tasks) == ["t1", "t2"]
    assert await repository.list_by_owner(Entity.TASK, "alice", "p1:t1") == []


@pytest.mark.asyncio
async def test_delete_is_idempotent(repository):
    await repository.put(Entity.PROJECT, "alice", make_project("alice", "p1"))

    assert await repository.delete(Entity.PROJECT, "alice", "p1") is True
    assert await repository.delete(Entity.PROJECT, "alice", "p1") is False


@pytest.mark.asyncio
async def test_find_task_scans_all_projects(repository):
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t1"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p2", "t2", "Second"))
    await repository.put(Entity.TASK, "bob", make_task("bob", "p3", "t3"))

    found = await repository.find_task("alice", "t2")

    assert found is not None
    assert found.title == "Second"
    assert found.project_id == "p2"
    assert await repository.find_task("alice", "t3") is None


@pytest.mark.asyncio
async def test_delete_project_tasks_only_touches_that_project(repository, store):
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t1"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p1", "t2"))
    await repository.put(Entity.TASK, "alice", make_task("alice", "p2", "t3"))
    await repository.put(Entity.TASK, "bob", make_task("bob", "p1", "t4"))

    removed = await repository.delete_project_tasks("alice", "p1")

    assert removed == 2
    assert store.keys() == ["tasks:alice:p2:t3", "tasks:bob:p1:t4"]


@pytest.mark.asyncio
async def test_delete_many_empty(repository):
    assert await repository.delete_many([]) == 0
