"""Configuration management commands."""

from typing import Any, Optional

import typer

from projectdesk.config import get_config_manager
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.console import get_console
from projectdesk.utils.ui.formatters import format_error, format_output, format_success

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()

SECRET_KEYS = {"anon_key", "service_role_key"}


def _mask_secrets(data: dict[str, Any]) -> dict[str, Any]:
    masked: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            masked[key] = _mask_secrets(value)
        elif key in SECRET_KEYS and value:
            masked[key] = f"{str(value)[:6]}…"
        else:
            masked[key] = value
    return masked


@app.command("view")
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config_dict = get_config_manager(profile).config.model_dump()
    format_output(_mask_secrets(config_dict), output)


@app.command("get")
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(1)
    console.print(value)


@app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager(profile).set(key, value)
    except (KeyError, ValueError) as e:
        format_error(f"Failed to set config: {str(e)}")
        raise typer.Exit(1) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    target = f"'{key}'" if key else "all configuration"
    if not yes and not typer.confirm(f"Reset {target} to defaults?"):
        raise typer.Exit(0)
    try:
        get_config_manager(profile).reset(key)
    except (KeyError, ValueError) as e:
        format_error(f"Failed to reset config: {str(e)}")
        raise typer.Exit(1) from e
    format_success(f"Reset {target}")
