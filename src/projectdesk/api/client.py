"""API client for ProjectDesk."""

from __future__ import annotations

from typing import Any

import httpx

from projectdesk.config import ConfigManager, get_config_manager
from projectdesk.exceptions import APIError
from projectdesk.utils.logger import get_logger

logger = get_logger()


class APIClient:
    """HTTP client for the ProjectDesk API.

    Every call carries ``Authorization: Bearer <token>`` with the stored
    session token, or the public anonymous key when nobody is signed in.
    Any non-2xx response raises ``APIError``. Nothing is retried.
    """

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_manager = config_manager or get_config_manager()
        self.config = self.config_manager.config
        self.base_url = self.config.api.endpoint.rstrip("/")
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def get_token(self) -> str:
        """Current session token, falling back to the anonymous key."""
        credentials = self.config_manager.load_credentials()
        if credentials and credentials.get("token"):
            return credentials["token"]
        return self.config.identity.anon_key

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
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

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body.

        Raises:
            APIError: If the response status is not 2xx
            httpx.RequestError: On transport failure
        """
        url = path if path.startswith("/") else f"/{path}"
        # The session may have changed since the last call
        response = await self._get_client().request(
            method,
            url,
            json=json,
            params=params,
            headers=self._get_headers(),
        )
        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            logger.warning("API error %d on %s %s: %s", response.status_code, method, url, response.text)
            raise APIError(response.status_code, response.text)
        return response.json()

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client(profile: str = "default") -> APIClient:
    """Create an API client for a configuration profile."""
    return APIClient(get_config_manager(profile))
