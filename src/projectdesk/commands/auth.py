"""Authentication commands."""

import typer
from rich.prompt import Prompt

from projectdesk.api.auth import AuthAPI
from projectdesk.api.client import get_client
from projectdesk.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper


@command_wrapper(auth_required=False)
async def signup(
    email: str = typer.Option(..., "--email", prompt=True, help="Email address"),
    name: str = typer.Option(..., "--name", prompt=True, help="Display name"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
) -> None:
    """Create an account."""
    async with get_client() as client:
        auth_api = AuthAPI(client)
        try:
            result = await auth_api.sign_up(email, password, name)
        finally:
            await auth_api.close()
    format_success(f"Account created for {result['user'].get('email', email)}")
    format_info("Use 'projectdesk login' to sign in.")


@command_wrapper(auth_required=False)
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Sign in and store the session token."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)
    if not email or not password:
        raise AppError("Email and password are required")

    async with get_client() as client:
        auth_api = AuthAPI(client)
        try:
            user = await auth_api.sign_in(email, password)
        finally:
            await auth_api.close()
    format_success(f"Logged in as {user.email or user.id}")


@command_wrapper(auth_required=False)
async def logout() -> None:
    """Sign out and forget the stored session token."""
    async with get_client() as client:
        auth_api = AuthAPI(client)
        try:
            await auth_api.sign_out()
        finally:
            await auth_api.close()
    format_success("Logged out")


@command_wrapper
async def whoami(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Show the user the server sees for the stored session."""
    async with get_client() as client:
        auth_api = AuthAPI(client)
        try:
            user = await auth_api.current_user()
        finally:
            await auth_api.close()
    if user is None:
        raise AppError("Not logged in")
    format_output(user, output)
