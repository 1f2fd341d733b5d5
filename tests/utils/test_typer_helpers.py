"""Tests for command suggestion on typos."""

from typer.testing import CliRunner

from projectdesk.main import app
from projectdesk.utils.typer_helpers import suggest_commands

runner = CliRunner()


def test_typo_suggests_command():
    result = runner.invoke(app, ["projcts"])

    assert result.exit_code == 1
    assert "unknown command" in result.output
    assert "'projects'" in result.output


def test_typo_in_sub_group():
    result = runner.invoke(app, ["tasks", "creat"])

    assert result.exit_code == 1
    assert "'create'" in result.output


def test_unrelated_name_has_no_suggestion():
    result = runner.invoke(app, ["zzzzzz"])

    assert result.exit_code == 2
    assert "unknown command" not in result.output


def test_suggest_commands_ranks_close_names():
    import typer.main

    group = typer.main.get_command(app)
    assert suggest_commands("logn", group)[0] == "login"
    assert suggest_commands("qqq", group) == []
