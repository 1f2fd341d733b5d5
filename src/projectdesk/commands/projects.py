"""Project management commands."""

import typer

from projectdesk.api.client import get_client
from projectdesk.api.projects import ProjectsAPI
from projectdesk.models import Priority, Project, ProjectFilters, ProjectStatus
from projectdesk.services.analytics import calculate_stats, filter_projects
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.formatters import format_output, format_stats, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


def _split_tags(tags: str | None) -> list[str] | None:
    if tags is None:
        return None
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


@app.command("list")
@command_wrapper
async def list_projects(
    search: str | None = typer.Option(None, "--search", "-s", help="Match name, description or manager"),
    status: ProjectStatus | None = typer.Option(None, "--status", help="Filter by status"),
    priority: Priority | None = typer.Option(None, "--priority", help="Filter by priority"),
    project_type: str | None = typer.Option(
        None, "--type", help="Filter by project type: all, expenditure, revenue"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List projects."""
    async with get_client() as client:
        projects = await ProjectsAPI(client).list_projects()

    filters = ProjectFilters(
        search=search, status=status, priority=priority, project_type=project_type
    )
    matching = filter_projects((Project.model_validate(p) for p in projects), filters)
    format_output([p.model_dump(mode="json", exclude_none=True) for p in matching], output)


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    status: ProjectStatus = typer.Option(ProjectStatus.PLANNING, "--status", help="Status"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", help="Priority"),
    start_date: str | None = typer.Option(None, "--start", help="Start date (ISO-8601)"),
    end_date: str | None = typer.Option(None, "--end", help="End date (ISO-8601)"),
    budget: str | None = typer.Option(None, "--budget", help="Budget, e.g. 25000 or '$25,000'"),
    tags: str | None = typer.Option(None, "--tags", help="Comma separated tags"),
    category: str | None = typer.Option(None, "--category", help="Work category"),
    manager: str | None = typer.Option(None, "--manager", help="Responsible manager"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    fields = {
        "description": description,
        "status": status.value,
        "priority": priority.value,
        "start_date": start_date,
        "end_date": end_date,
        "budget": budget,
        "tags": _split_tags(tags),
        "category": category,
        "manager": manager,
    }
    async with get_client() as client:
        project = await ProjectsAPI(client).create_project(
            name, **{k: v for k, v in fields.items() if v is not None}
        )
    format_success(f"Project created: {project['id']}")
    format_output(project, output)


@app.command("update")
@command_wrapper
async def update_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    status: ProjectStatus | None = typer.Option(None, "--status", help="Status"),
    priority: Priority | None = typer.Option(None, "--priority", help="Priority"),
    progress: int | None = typer.Option(None, "--progress", min=0, max=100, help="Percent complete"),
    budget: str | None = typer.Option(None, "--budget", help="Budget"),
    tags: str | None = typer.Option(None, "--tags", help="Comma separated tags"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Update a project. Only the given options are changed."""
    updates = {
        "name": name,
        "description": description,
        "status": status.value if status else None,
        "priority": priority.value if priority else None,
        "progress": progress,
        "budget": budget,
        "tags": _split_tags(tags),
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        raise AppError("No updates specified")

    async with get_client() as client:
        project = await ProjectsAPI(client).update_project(project_id, **updates)
    format_success(f"Project updated: {project_id}")
    format_output(project, output)


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project and all of its tasks."""
    if not yes and not typer.confirm(
        f"Are you sure you want to delete project {project_id} and its tasks?"
    ):
        raise typer.Exit(0)

    async with get_client() as client:
        await ProjectsAPI(client).delete_project(project_id)
    format_success(f"Project deleted: {project_id}")


@app.command("stats")
@command_wrapper
async def project_stats(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Show dashboard statistics and budget usage."""
    async with get_client() as client:
        projects = await ProjectsAPI(client).list_projects()

    stats = calculate_stats(Project.model_validate(p) for p in projects).model_dump()
    if output == "pretty":
        format_stats(stats)
    else:
        format_output(stats, output)
