"""Task management commands."""

import typer

from projectdesk.api.client import get_client
from projectdesk.api.tasks import TasksAPI
from projectdesk.models import Priority
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


@app.command("list")
@command_wrapper
async def list_tasks(
    project_id: str | None = typer.Option(None, "--project", "-p", help="Only tasks of this project"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    async with get_client() as client:
        tasks = await TasksAPI(client).list_tasks(project_id)
    format_output(tasks, output)


@app.command("create")
@command_wrapper
async def create_task(
    project_id: str = typer.Argument(..., help="Parent project ID"),
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    status: str = typer.Option("To Do", "--status", help="Status"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", help="Priority"),
    due_date: str | None = typer.Option(None, "--due", help="Due date (ISO-8601)"),
    assigned_to: str | None = typer.Option(None, "--assignee", help="Assignee"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Create a task under a project."""
    fields = {
        "description": description,
        "status": status,
        "priority": priority.value,
        "due_date": due_date,
        "assigned_to": assigned_to,
    }
    async with get_client() as client:
        task = await TasksAPI(client).create_task(
            project_id, title, **{k: v for k, v in fields.items() if v is not None}
        )
    format_success(f"Task created: {task['id']}")
    format_output(task, output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    status: str | None = typer.Option(None, "--status", help="Status"),
    priority: Priority | None = typer.Option(None, "--priority", help="Priority"),
    due_date: str | None = typer.Option(None, "--due", help="Due date (ISO-8601)"),
    assigned_to: str | None = typer.Option(None, "--assignee", help="Assignee"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Update a task. Only the given options are changed."""
    updates = {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority.value if priority else None,
        "due_date": due_date,
        "assigned_to": assigned_to,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        raise AppError("No updates specified")

    async with get_client() as client:
        task = await TasksAPI(client).update_task(task_id, **updates)
    format_success(f"Task updated: {task_id}")
    format_output(task, output)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not typer.confirm(f"Are you sure you want to delete task {task_id}?"):
        raise typer.Exit(0)

    async with get_client() as client:
        await TasksAPI(client).delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
