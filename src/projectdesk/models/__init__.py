"""ProjectDesk domain models.

Pydantic models for the records stored by the server, the payloads accepted
by its routes, and the user identity returned by the identity provider.
"""

from .core import (
    IMMUTABLE_FIELDS,
    Priority,
    Project,
    ProjectCreate,
    ProjectDetails,
    ProjectFilters,
    ProjectStats,
    ProjectStatus,
    ProjectUpdate,
    SignupRequest,
    Task,
    TaskCreate,
    TaskUpdate,
    User,
    merge_record,
    next_timestamp,
    utcnow,
)

__all__ = [
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectDetails",
    "ProjectFilters",
    "ProjectStats",
    "ProjectStatus",
    "Priority",
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Users
    "User",
    "SignupRequest",
    # Helpers
    "IMMUTABLE_FIELDS",
    "merge_record",
    "next_timestamp",
    "utcnow",
]
