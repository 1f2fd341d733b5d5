"""Main entry point for ProjectDesk CLI."""

import typer
import uvicorn

from projectdesk import __version__
from projectdesk.commands import auth, config, projects, tasks
from projectdesk.config import get_config_manager
from projectdesk.server import create_app
from projectdesk.utils.logger import enable_console_logging, get_logger
from projectdesk.utils.typer_helpers import SuggestingGroup
from projectdesk.utils.ui.console import get_console
from projectdesk.utils.ui.formatters import format_error

app = typer.Typer(
    name="projectdesk",
    cls=SuggestingGroup,
    help="Project tracking server and command-line client",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")

app.command("signup")(auth.signup)
app.command("login")(auth.login)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]ProjectDesk[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
    db_path: str | None = typer.Option(None, "--db", help="SQLite database file"),
    profile: str = typer.Option("default", "--profile", help="Configuration profile"),
) -> None:
    """Run the HTTP API server."""
    server_config = get_config_manager(profile).config.model_copy(deep=True)
    if db_path:
        server_config.server.db_path = db_path

    try:
        api = create_app(server_config)
    except ValueError as e:
        format_error(str(e))
        raise typer.Exit(1) from e

    enable_console_logging()
    get_logger().info("starting server version %s", __version__)
    uvicorn.run(
        api,
        host=host or server_config.server.host,
        port=port or server_config.server.port,
    )


if __name__ == "__main__":
    app()
