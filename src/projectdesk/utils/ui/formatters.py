"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from projectdesk.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

# Columns shown by the table format for list responses
PROJECT_COLUMNS = ["id", "name", "status", "priority", "progress", "budget", "end_date"]
TASK_COLUMNS = ["id", "title", "status", "priority", "project_id", "due_date", "assigned_to"]

PRIORITY_STYLES = {
    "Critical": "bold red",
    "High": "bold orange3",
    "Medium": "bold yellow",
    "Low": "green",
}

STATUS_ICONS = {
    "Planning": "📝",
    "In Progress": "🚧",
    "On Hold": "⏸️",
    "Completed": "✅",
    "Cancelled": "✖️",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    first_item = items[0]
    if "title" in first_item:
        columns = TASK_COLUMNS
    elif "name" in first_item:
        columns = PROJECT_COLUMNS
    else:
        columns = list(first_item.keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if value is None:
            continue
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]Nothing to show[/yellow]")
        return

    if isinstance(data, list):
        if all(isinstance(item, dict) and "title" in item for item in data):
            format_tasks_pretty(data)
        elif all(isinstance(item, dict) and "name" in item for item in data):
            format_projects_pretty(data)
        else:
            for item in data:
                console.print(f"• {item}")
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_projects_pretty(projects: list[dict]) -> None:
    """Format projects in pretty format."""
    header = Text()
    header.append("📁 Projects ", style="bold cyan")
    header.append(f"({len(projects)})", style="dim")
    console.print(header)
    console.print()

    for project in projects:
        format_project_item(project, indent="  ")


def format_project_item(project: dict, indent: str = "") -> None:
    """Format a single project item."""
    status = project.get("status", "")
    priority = project.get("priority", "")

    line = Text()
    line.append(f"{indent}{STATUS_ICONS.get(status, '📁')} ")
    line.append(project.get("name", "Untitled"), style="bold")
    line.append(f"  [{priority}]", style=PRIORITY_STYLES.get(priority, "dim"))
    console.print(line)

    pct = project.get("progress") or 0
    meta = [
        (f"{get_progress_bar(pct)} {pct}% complete", get_completion_color(pct)),
        (f"{status}  budget {project.get('budget') or 0:,.2f}", "dim"),
    ]
    if project.get("end_date"):
        meta.append((f"Ends: {str(project['end_date'])[:10]}", "cyan"))
    if project.get("tags"):
        meta.append((" ".join(f"#{tag}" for tag in project["tags"]), "blue"))
    meta.append((f"id {project.get('id', '-')}", "dim"))

    for text, style in meta:
        meta_line = Text()
        meta_line.append(f"{indent}   └─ ", style="dim")
        meta_line.append(text, style=style)
        console.print(meta_line)


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks in pretty format."""
    console.print(Text(f"☑️  Tasks ({len(tasks)})", style="bold cyan"))
    console.print()
    for task in tasks:
        priority = task.get("priority", "")
        line = Text()
        line.append(f"  • {task.get('title', 'Untitled')}", style="bold")
        line.append(f"  [{priority}]", style=PRIORITY_STYLES.get(priority, "dim"))
        line.append(f"  {task.get('status', '')}", style="dim")
        console.print(line)
        details = [f"id {task.get('id', '-')}"]
        if task.get("due_date"):
            details.append(f"due {str(task['due_date'])[:10]}")
        if task.get("assigned_to"):
            details.append(f"👤 {task['assigned_to']}")
        console.print(Text(f"     └─ {'  '.join(details)}", style="dim"))


def format_stats(stats: dict) -> None:
    """Display dashboard statistics."""
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold white", justify="right")

    table.add_row("Total projects", str(stats["total_projects"]))
    table.add_row("Active", str(stats["active_projects"]))
    table.add_row("Completed", str(stats["completed_projects"]))
    table.add_row("On hold", str(stats["projects_on_hold"]))
    table.add_row("High priority", str(stats["high_priority_projects"]))
    table.add_row("Total budget", f"{stats['total_budget']:,.2f}")
    table.add_row("Used budget", f"{stats['used_budget']:,.2f}")
    table.add_row("Remaining budget", f"{stats['remaining_budget']:,.2f}")

    console.print(table)
