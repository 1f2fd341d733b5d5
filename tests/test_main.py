"""Tests for the top-level CLI application."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from projectdesk import __version__
from projectdesk.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_command_groups():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for name in ("projects", "tasks", "config", "login", "serve"):
        assert name in result.output


def test_serve_runs_uvicorn(config_manager):
    fake_app = MagicMock()
    with (
        patch("projectdesk.main.get_config_manager", return_value=config_manager),
        patch("projectdesk.main.create_app", return_value=fake_app) as create_app,
        patch("projectdesk.main.enable_console_logging"),
        patch("projectdesk.main.uvicorn.run") as run,
    ):
        result = runner.invoke(app, ["serve", "--port", "9100", "--db", "/tmp/desk.db"])

    assert result.exit_code == 0, result.output
    config = create_app.call_args[0][0]
    assert config.server.db_path == "/tmp/desk.db"
    assert config_manager.config.server.db_path is None
    run.assert_called_once_with(fake_app, host="127.0.0.1", port=9100)


def test_serve_without_identity_config(config_manager):
    with (
        patch("projectdesk.main.get_config_manager", return_value=config_manager),
        patch("projectdesk.main.uvicorn.run") as run,
    ):
        result = runner.invoke(app, ["serve"])

    assert result.exit_code == 1
    assert "identity.url" in result.output
    run.assert_not_called()
