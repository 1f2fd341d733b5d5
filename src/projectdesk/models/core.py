"""Project and task data models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, EmailStr, Field, field_validator

from projectdesk.utils.currency import parse_budget


class ProjectStatus(StrEnum):
    """Lifecycle status of a project."""

    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Priority(StrEnum):
    """Priority shared by projects and tasks."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def next_timestamp(previous: datetime | None) -> datetime:
    """Return the current time, strictly later than *previous*."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class ProjectDetails(BaseModel):
    """Optional approval and procurement details carried on a project.

    Attributes:
        serial_no: Serial number ("S. No") in the register of works
        name_of_work: Official name of the work
        file_number: File reference number
        date_of_initiation: Date the proposal was initiated
        scheme_type: Funding scheme (rhq-er, chq, rcs, moca, other)
        project_type: "expenditure" or "revenue"
        estimated_cost_excl_gst: Estimated cost excluding GST
        estimated_cost_incl_gst: Estimated cost including GST
        capex_cost_incl_gst: Capital expenditure including GST
        opex_cost_incl_gst: Operational expenditure including GST
        proposed_by: Proposer
        recommended_by: Recommender
        approval_accorded_by: Authority granting in-principle approval
        approval_date: Date of approval
        sub_division_before_aaes: Executing sub-division before AA&ES
        sub_division_after_aaes: Executing sub-division after AA&ES
        mode_of_procurement: e.g. gem, cpp-portal, niq, spot-purchase
        method_of_procurement: e.g. bidding, reverse-auction, open-tender
        emd_exemption_type: e.g. emd, surety-bond, msme
        manager: Responsible manager
        category: Work category (maintenance, operations, ...)
    """

    serial_no: str | None = None
    name_of_work: str | None = None
    file_number: str | None = None
    date_of_initiation: str | None = None
    scheme_type: str | None = None
    project_type: str | None = None
    estimated_cost_excl_gst: str | None = None
    estimated_cost_incl_gst: str | None = None
    capex_cost_incl_gst: str | None = None
    opex_cost_incl_gst: str | None = None
    proposed_by: str | None = None
    recommended_by: str | None = None
    approval_accorded_by: str | None = None
    approval_date: str | None = None
    sub_division_before_aaes: str | None = None
    sub_division_after_aaes: str | None = None
    mode_of_procurement: str | None = None
    method_of_procurement: str | None = None
    emd_exemption_type: str | None = None
    manager: str | None = None
    category: str | None = None


class _BudgetMixin(BaseModel):
    @field_validator("budget", mode="before", check_fields=False)
    @classmethod
    def _parse_budget(cls, value: Any) -> Any:
        if value is None:
            return value
        return parse_budget(value)


class Project(ProjectDetails, _BudgetMixin):
    """A stored project record.

    Attributes:
        id: Server-generated identifier
        owner: Identity of the owning user
        name: Project name
        description: Free-text description
        status: Lifecycle status
        priority: Priority level
        start_date: Planned start (ISO-8601 string)
        end_date: Planned end (ISO-8601 string)
        budget: Numeric budget
        tags: Ordered tag strings
        progress: Completion percentage
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    owner: str
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: str | None = None
    end_date: str | None = None
    budget: float = 0.0
    tags: list[str] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)
    created_at: datetime
    updated_at: datetime


class ProjectCreate(ProjectDetails, _BudgetMixin):
    """Payload for creating a project."""

    name: str = Field(min_length=1)
    description: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: str | None = None
    end_date: str | None = None
    budget: float = 0.0
    tags: list[str] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)


class ProjectUpdate(ProjectDetails, _BudgetMixin):
    """Payload for updating a project.

    Only fields explicitly supplied by the caller are applied.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ProjectStatus | None = None
    priority: Priority | None = None
    start_date: str | None = None
    end_date: str | None = None
    budget: float | None = None
    tags: list[str] | None = None
    progress: int | None = Field(default=None, ge=0, le=100)


class Task(BaseModel):
    """A stored task record belonging to a project."""

    id: str
    owner: str
    project_id: str
    title: str
    description: str = ""
    status: str = "To Do"
    priority: Priority = Priority.MEDIUM
    due_date: str | None = None
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseModel):
    """Payload for creating a task."""

    project_id: str
    title: str = Field(min_length=1)
    description: str = ""
    status: str = "To Do"
    priority: Priority = Priority.MEDIUM
    due_date: str | None = None
    assigned_to: str | None = None


class TaskUpdate(BaseModel):
    """Payload for updating a task. The parent project cannot be changed."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: str | None = None
    priority: Priority | None = None
    due_date: str | None = None
    assigned_to: str | None = None


class User(BaseModel):
    """Authenticated user as reported by the identity provider."""

    id: str
    email: str | None = None
    name: str | None = None


class SignupRequest(BaseModel):
    """Account creation payload."""

    email: EmailStr
    password: str = Field(min_length=6)
    name: str = ""


RecordT = TypeVar("RecordT", Project, Task)

# Server-managed fields that an update can never overwrite
IMMUTABLE_FIELDS = frozenset({"id", "owner", "created_at", "updated_at"})


def merge_record(existing: RecordT, updates: BaseModel) -> RecordT:
    """Shallow-merge *updates* over *existing*.

    Fields the caller supplied override stored values, everything else is
    preserved. ``updated_at`` is refreshed and always moves forward.
    """
    changes = {
        key: value
        for key, value in updates.model_dump(exclude_unset=True).items()
        if key not in IMMUTABLE_FIELDS
    }
    data = existing.model_dump()
    data.update(changes)
    data["updated_at"] = next_timestamp(existing.updated_at)
    return type(existing).model_validate(data)


class ProjectFilters(BaseModel):
    """Filters for narrowing a list of projects.

    Attributes:
        search: Case-insensitive text matched against name, description and manager
        status: Exact status match
        priority: Exact priority match
        project_type: "expenditure", "revenue" or "all", derived from the category
    """

    search: str | None = None
    status: ProjectStatus | None = None
    priority: Priority | None = None
    project_type: str | None = Field(default=None, pattern="^(all|expenditure|revenue)$")


class ProjectStats(BaseModel):
    """Dashboard summary of a set of projects."""

    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    projects_on_hold: int = 0
    high_priority_projects: int = 0
    total_budget: float = 0.0
    used_budget: float = 0.0
    remaining_budget: float = 0.0
