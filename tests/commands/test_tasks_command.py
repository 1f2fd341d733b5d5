"""Tests for task commands."""
# pylint: disable=redefined-outer-name

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from projectdesk.commands.tasks import app

runner = CliRunner()

TASK = {
    "id": "t1",
    "owner": "alice-id",
    "project_id": "p1",
    "title": "Survey",
    "description": "",
    "status": "To Do",
    "priority": "Medium",
    "due_date": None,
    "assigned_to": None,
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-01T12:00:00Z",
}


@pytest.fixture
def mock_tasks_api():
    api_mock = MagicMock()
    api_mock.list_tasks = AsyncMock(return_value=[TASK])
    api_mock.create_task = AsyncMock(return_value=TASK)
    api_mock.update_task = AsyncMock(return_value={**TASK, "status": "Done"})
    api_mock.delete_task = AsyncMock(return_value={"success": True})

    with patch("projectdesk.commands.tasks.get_client", return_value=MagicMock()):
        with patch("projectdesk.commands.tasks.TasksAPI", return_value=api_mock):
            yield api_mock


def test_list_for_project(mock_tasks_api):
    result = runner.invoke(app, ["list", "--project", "p1", "-o", "json"])

    assert result.exit_code == 0, result.output
    mock_tasks_api.list_tasks.assert_awaited_once_with("p1")
    assert json.loads(result.stdout)[0]["title"] == "Survey"


def test_list_pretty(mock_tasks_api):
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    mock_tasks_api.list_tasks.assert_awaited_once_with(None)
    assert "Survey" in result.output


def test_create(mock_tasks_api):
    result = runner.invoke(
        app, ["create", "p1", "Survey", "--priority", "High", "--assignee", "ravi"]
    )

    assert result.exit_code == 0, result.output
    assert "Task created: t1" in result.output
    args, kwargs = mock_tasks_api.create_task.call_args
    assert args == ("p1", "Survey")
    assert kwargs["priority"] == "High"
    assert kwargs["assigned_to"] == "ravi"
    assert kwargs["status"] == "To Do"
    assert "due_date" not in kwargs


def test_update(mock_tasks_api):
    result = runner.invoke(app, ["update", "t1", "--status", "Done"])

    assert result.exit_code == 0, result.output
    mock_tasks_api.update_task.assert_awaited_once_with("t1", status="Done")


def test_update_without_options(mock_tasks_api):
    result = runner.invoke(app, ["update", "t1"])

    assert result.exit_code == 1
    assert "No updates specified" in result.output


def test_delete(mock_tasks_api):
    result = runner.invoke(app, ["delete", "t1", "-y"])

    assert result.exit_code == 0
    assert "Task deleted: t1" in result.output
    mock_tasks_api.delete_task.assert_awaited_once_with("t1")
