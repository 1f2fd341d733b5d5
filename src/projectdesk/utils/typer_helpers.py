"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from projectdesk.utils.ui.formatters import format_error, format_info


def suggest_commands(attempted: str, group: click.Group) -> list[str]:
    """Up to three command names of *group* that look like *attempted*."""
    return get_close_matches(attempted, list(group.commands), n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Group that answers an unknown command with the closest known ones.

    ``projectdesk projcts list`` prints ``projects`` as a suggestion and
    exits 1 instead of showing click's usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            suggestions = suggest_commands(args[0], self) if args else []
            if not suggestions:
                raise
            format_error(f'unknown command "{args[0]}" for "{ctx.command_path}"')
            format_info("Did you mean " + " or ".join(f"'{s}'" for s in suggestions) + "?")
            raise typer.Exit(1) from e
