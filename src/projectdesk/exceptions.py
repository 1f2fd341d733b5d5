"""Exception hierarchy shared by the server, the store adapters and the client."""

from __future__ import annotations


class ProjectDeskError(Exception):
    """Base class for all ProjectDesk errors."""


class UnauthenticatedError(ProjectDeskError):
    """Missing, invalid or anonymous bearer credential."""

    def __init__(self, message: str = "Unauthorized - Please sign in"):
        super().__init__(message)


class NotFoundError(ProjectDeskError):
    """Record is absent or not owned by the caller."""

    def __init__(self, entity: str, record_id: str | None = None):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found")


class StoreError(ProjectDeskError):
    """Underlying key-value operation failed."""


class IdentityProviderError(ProjectDeskError):
    """The identity provider rejected a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class APIError(ProjectDeskError):
    """Non-success response received by the API client."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API Error ({status_code}): {body}")
