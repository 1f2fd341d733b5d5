"""Shared test fixtures and configuration.

Provides an isolated config directory, an in-memory record store and a fake
identity provider reached through ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from projectdesk.adapters import InMemoryKeyValueStore
from projectdesk.config import ENV_OVERRIDES, Config, ConfigManager, IdentityConfig
from projectdesk.repositories import RecordRepository
from projectdesk.services.auth_service import IdentityProvider

IDENTITY_URL = "http://identity.test"
ANON_KEY = "anon-public-key"
SERVICE_ROLE_KEY = "service-role-key"
TAKEN_EMAIL = "taken@example.com"
PASSWORD = "secret123"

# access token -> provider user object
USERS = {
    "token-alice": {
        "id": "alice-id",
        "email": "alice@example.com",
        "user_metadata": {"name": "Alice"},
    },
    "token-bob": {
        "id": "bob-id",
        "email": "bob@example.com",
        "user_metadata": {"name": "Bob"},
    },
}


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def identity_handler(request: httpx.Request) -> httpx.Response:
    """Minimal GoTrue behaviour for the endpoints ProjectDesk calls."""
    path = request.url.path

    if request.method == "GET" and path == "/auth/v1/user":
        token = request.headers.get("authorization", "").removeprefix("Bearer ")
        if token in USERS:
            return httpx.Response(200, json=USERS[token])
        return httpx.Response(401, json={"msg": "invalid JWT"})

    if request.method == "POST" and path == "/auth/v1/admin/users":
        if request.headers.get("authorization") != f"Bearer {SERVICE_ROLE_KEY}":
            return httpx.Response(403, json={"msg": "User not allowed"})
        body = json.loads(request.content)
        if body["email"] == TAKEN_EMAIL:
            return httpx.Response(
                422, json={"msg": "A user with this email address has already been registered"}
            )
        return httpx.Response(
            200,
            json={
                "id": "new-user-id",
                "email": body["email"],
                "email_confirmed_at": "2024-01-01T00:00:00Z",
                "user_metadata": body["user_metadata"],
            },
        )

    if request.method == "POST" and path == "/auth/v1/token":
        body = json.loads(request.content)
        if body.get("password") != PASSWORD:
            return httpx.Response(
                400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
            )
        return httpx.Response(
            200,
            json={
                "access_token": "token-alice",
                "refresh_token": "refresh-alice",
                "user": USERS["token-alice"],
            },
        )

    if request.method == "POST" and path == "/auth/v1/logout":
        return httpx.Response(204)

    return httpx.Response(404, json={"msg": "not found"})


# ---------------------------------------------------------------------------
# Identity provider
# ---------------------------------------------------------------------------


@pytest.fixture()
def identity_config() -> IdentityConfig:
    return IdentityConfig(url=IDENTITY_URL, anon_key=ANON_KEY, service_role_key=SERVICE_ROLE_KEY)


@pytest.fixture()
def identity(identity_config) -> IdentityProvider:
    return IdentityProvider.from_config(
        identity_config, transport=httpx.MockTransport(identity_handler)
    )


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def repository(store) -> RecordRepository:
    return RecordRepository(store)


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def server_config(identity_config) -> Config:
    return Config(identity=identity_config)


@pytest.fixture()
def config_manager(tmp_path, monkeypatch) -> ConfigManager:
    """A ConfigManager whose files live in *tmp_path* only."""
    for env_name in ENV_OVERRIDES:
        monkeypatch.delenv(env_name, raising=False)
    return ConfigManager(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip the stored-credentials check in CLI commands by default."""
    with patch("projectdesk.commands.decorators._require_auth"):
        yield
