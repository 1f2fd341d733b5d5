"""Authentication API endpoints."""

from __future__ import annotations

from typing import Any

from projectdesk.api.client import APIClient
from projectdesk.exceptions import IdentityProviderError
from projectdesk.models import User
from projectdesk.services.auth_service import IdentityProvider, user_from_payload
from projectdesk.utils.logger import get_logger

logger = get_logger()


class AuthAPI:
    """Sign-up goes through the server; sign-in talks to the identity provider."""

    def __init__(self, client: APIClient, identity: IdentityProvider | None = None):
        self.client = client
        self.config_manager = client.config_manager
        self.identity = identity or IdentityProvider.from_config(client.config.identity)

    async def sign_up(self, email: str, password: str, name: str) -> dict[str, Any]:
        """Create an account via the server's signup route."""
        return await self.client.post(
            "/signup", json={"email": email, "password": password, "name": name}
        )

    async def sign_in(self, email: str, password: str) -> User:
        """Sign in with email and password and store the session token."""
        session = await self.identity.sign_in_with_password(email, password)
        self.config_manager.save_credentials(
            session["access_token"], session.get("refresh_token")
        )
        return user_from_payload(session["user"])

    async def sign_out(self) -> None:
        """Revoke the session if possible and forget the stored token."""
        credentials = self.config_manager.load_credentials()
        try:
            if credentials and credentials.get("token"):
                await self.identity.sign_out(credentials["token"])
        except IdentityProviderError as e:
            # The token may already be expired; forgetting it locally is enough
            logger.info("remote sign-out failed: %s", e)
        finally:
            self.config_manager.clear_credentials()

    async def current_user(self) -> dict[str, Any] | None:
        """The signed-in user as seen by the server, or None."""
        if not self.config_manager.load_credentials():
            return None
        response = await self.client.get("/test-auth")
        return response.get("user")

    async def close(self) -> None:
        await self.identity.close()
