"""Authentication services backed by an external identity provider.

The identity provider speaks the GoTrue REST API (the auth service used by
Supabase). ProjectDesk keeps no session state of its own: every bearer token
is verified by asking the provider who it belongs to.
"""

from __future__ import annotations

from typing import Any

import httpx

from projectdesk.config import IdentityConfig
from projectdesk.exceptions import IdentityProviderError
from projectdesk.models import User
from projectdesk.utils.logger import get_logger

logger = get_logger()


def _error_message(response: httpx.Response) -> str:
    """Pull a human readable message out of a provider error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict):
        for field in ("msg", "message", "error_description", "error"):
            if payload.get(field):
                return str(payload[field])
    return response.text or f"HTTP {response.status_code}"


def user_from_payload(payload: dict[str, Any]) -> User:
    """Build a User from a provider user object."""
    metadata = payload.get("user_metadata") or {}
    return User(id=payload["id"], email=payload.get("email"), name=metadata.get("name"))


class IdentityProvider:
    """Async client for the identity provider's auth endpoints."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        service_role_key: str = "",
        *,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = url.rstrip("/")
        self.anon_key = anon_key
        self.service_role_key = service_role_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: IdentityConfig, **kwargs: Any) -> IdentityProvider:
        return cls(
            config.url,
            config.anon_key,
            config.service_role_key,
            timeout=config.timeout,
            **kwargs,
        )

    async def __aenter__(self) -> IdentityProvider:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_user(self, access_token: str) -> User:
        """Resolve an access token to the user it was issued to.

        Raises:
            IdentityProviderError: If the provider rejects the token
        """
        response = await self._get_client().get(
            "/auth/v1/user",
            headers={
                "apikey": self.anon_key or self.service_role_key,
                "Authorization": f"Bearer {access_token}",
            },
        )
        if response.status_code != 200:
            raise IdentityProviderError(_error_message(response), response.status_code)
        return user_from_payload(response.json())

    async def create_user(self, email: str, password: str, name: str) -> dict[str, Any]:
        """Create an account with its email already confirmed.

        Requires the service-role key.

        Raises:
            IdentityProviderError: If the provider refuses to create the user
        """
        response = await self._get_client().post(
            "/auth/v1/admin/users",
            headers={
                "apikey": self.service_role_key,
                "Authorization": f"Bearer {self.service_role_key}",
            },
            json={
                "email": email,
                "password": password,
                "user_metadata": {"name": name},
                # No mail server is configured, so skip the confirmation step
                "email_confirm": True,
            },
        )
        if response.status_code not in (200, 201):
            raise IdentityProviderError(_error_message(response), response.status_code)
        payload = response.json()
        # Some provider versions wrap the user object
        return payload.get("user", payload) if isinstance(payload, dict) else payload

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email and password for a session.

        Returns:
            Session payload with ``access_token``, ``refresh_token`` and ``user``
        """
        response = await self._get_client().post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            headers={"apikey": self.anon_key},
            json={"email": email, "password": password},
        )
        if response.status_code != 200:
            raise IdentityProviderError(_error_message(response), response.status_code)
        return response.json()

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind *access_token*."""
        response = await self._get_client().post(
            "/auth/v1/logout",
            headers={"apikey": self.anon_key, "Authorization": f"Bearer {access_token}"},
        )
        if response.status_code not in (200, 204):
            raise IdentityProviderError(_error_message(response), response.status_code)


class AuthGate:
    """Turns an ``Authorization`` header into a verified user, or None."""

    def __init__(self, identity: IdentityProvider, anon_key: str):
        self.identity = identity
        self.anon_key = anon_key

    @staticmethod
    def extract_token(authorization: str | None) -> str | None:
        """Return the token of a ``Bearer <token>`` header value."""
        if not authorization:
            return None
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer":
            return None
        return token.strip() or None

    async def authenticate(self, authorization: str | None) -> User | None:
        """Verify the bearer credential with the identity provider.

        The public anonymous key is never accepted as a user credential.
        """
        token = self.extract_token(authorization)
        if token is None:
            logger.info("auth rejected: no bearer token")
            return None
        if self.anon_key and token == self.anon_key:
            logger.info("auth rejected: anonymous key")
            return None

        try:
            user = await self.identity.get_user(token)
        except (IdentityProviderError, httpx.HTTPError, KeyError, ValueError) as e:
            logger.info("auth rejected: %s", e)
            return None

        logger.debug("auth ok: user %s", user.id)
        return user
