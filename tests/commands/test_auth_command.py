"""Tests for the top-level authentication commands."""
# pylint: disable=redefined-outer-name

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from projectdesk.exceptions import IdentityProviderError
from projectdesk.main import app
from projectdesk.models import User

runner = CliRunner()


@pytest.fixture
def mock_auth_api():
    api_mock = MagicMock()
    api_mock.sign_up = AsyncMock(return_value={"user": {"id": "u1", "email": "a@example.com"}})
    api_mock.sign_in = AsyncMock(return_value=User(id="alice-id", email="alice@example.com"))
    api_mock.sign_out = AsyncMock()
    api_mock.current_user = AsyncMock(return_value={"id": "alice-id", "email": "alice@example.com"})
    api_mock.close = AsyncMock()

    with patch("projectdesk.commands.auth.get_client", return_value=MagicMock()):
        with patch("projectdesk.commands.auth.AuthAPI", return_value=api_mock):
            yield api_mock


def test_signup(mock_auth_api):
    result = runner.invoke(
        app, ["signup", "--email", "a@example.com", "--name", "A", "--password", "secret123"]
    )

    assert result.exit_code == 0, result.output
    assert "Account created for a@example.com" in result.output
    mock_auth_api.sign_up.assert_awaited_once_with("a@example.com", "secret123", "A")
    mock_auth_api.close.assert_awaited_once()


def test_login(mock_auth_api):
    result = runner.invoke(app, ["login", "--email", "alice@example.com", "--password", "pw"])

    assert result.exit_code == 0, result.output
    assert "Logged in as alice@example.com" in result.output
    mock_auth_api.sign_in.assert_awaited_once_with("alice@example.com", "pw")


def test_login_rejected(mock_auth_api):
    mock_auth_api.sign_in.side_effect = IdentityProviderError("Invalid login credentials", 400)

    result = runner.invoke(app, ["login", "--email", "alice@example.com", "--password", "bad"])

    assert result.exit_code == 1
    assert "Invalid login credentials" in result.output
    mock_auth_api.close.assert_awaited_once()


def test_logout(mock_auth_api):
    result = runner.invoke(app, ["logout"])

    assert result.exit_code == 0
    assert "Logged out" in result.output
    mock_auth_api.sign_out.assert_awaited_once()


def test_whoami(mock_auth_api):
    result = runner.invoke(app, ["whoami", "-o", "json"])

    assert result.exit_code == 0, result.output
    assert "alice@example.com" in result.stdout


def test_whoami_not_logged_in(mock_auth_api):
    mock_auth_api.current_user.return_value = None

    result = runner.invoke(app, ["whoami"])

    assert result.exit_code == 1
    assert "Not logged in" in result.output
