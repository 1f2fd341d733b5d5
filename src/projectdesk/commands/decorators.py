"""Decorators for command functions."""

import asyncio
import inspect
import functools
import time
import traceback
from collections.abc import Callable

import typer

from projectdesk.config import get_config_manager
from projectdesk.exceptions import APIError, ProjectDeskError
from projectdesk.utils.logger import get_logger
from projectdesk.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a stored session token."""
    if not get_config_manager().load_credentials():
        format_error("Not logged in. Use 'projectdesk login' to authenticate.")
        raise typer.Exit(1)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_auth()

                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
                return result

            except typer.Exit:
                raise

            except (AppError, APIError, ProjectDeskError) as e:
                logger.error(
                    "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, str(e)
                )
                format_error(str(e))
                raise typer.Exit(code=getattr(e, "exit_code", 1)) from e

            except Exception as e:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    time.monotonic() - start,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=1) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
