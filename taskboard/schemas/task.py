"""
Task Schemas - Pydantic models for task operations

Validation context (optional, passed via model_validate(..., context=...)):
    now: datetime used for the due-date rule (defaults to the current UTC time)
    check_due_date: set False to skip the due-date rule (merged updates that
        did not touch dueDate)
"""

from pydantic import Field, ValidationInfo, field_serializer, field_validator
from typing import Dict, List, Literal, Optional
from datetime import date, datetime, time, timezone
from uuid import UUID
import re

from taskboard.models.task import Task, TaskStatus, TaskPriority
from taskboard.schemas.common import CamelModel
from taskboard.utils.timeutils import to_naive_utc, utcnow

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
ASSIGNED_USER_MAX_LENGTH = 100

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SortField = Literal["createdAt", "updatedAt", "dueDate", "title"]
SortOrder = Literal["asc", "desc"]


def _clean_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Task title is required")
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    return v


def _clean_description(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if len(v) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
    return v or None  # Blank description is stored as "no description"


def _clean_assigned_user(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Assigned user is required")
    if len(v) > ASSIGNED_USER_MAX_LENGTH:
        raise ValueError(f"Assigned user cannot exceed {ASSIGNED_USER_MAX_LENGTH} characters")
    return v


def _check_due_date(v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
    v = to_naive_utc(v)
    context = info.context or {}
    if v is None or not context.get("check_due_date", True):
        return v
    now = context.get("now") or utcnow()
    if v < now:
        raise ValueError("Due date cannot be in the past")
    return v


class TaskCreate(CamelModel):
    """Full task draft - used for creation and to re-validate merged updates"""
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM  # Server-side default
    assigned_user: str
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)

    @field_validator("assigned_user")
    @classmethod
    def validate_assigned_user(cls, v):
        return _clean_assigned_user(v)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v, info: ValidationInfo):
        return _check_due_date(v, info)


class TaskUpdate(CamelModel):
    """Partial update - only supplied fields change"""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_user: Optional[str] = None
    due_date: Optional[datetime] = None  # null clears the due date

    @field_validator("title", "status", "priority", "assigned_user", mode="before")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError(f"{info.field_name.replace('_', ' ').capitalize()} cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)

    @field_validator("assigned_user")
    @classmethod
    def validate_assigned_user(cls, v):
        return _clean_assigned_user(v)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v, info: ValidationInfo):
        return _check_due_date(v, info)

    def supplied_fields(self) -> Dict[str, object]:
        """Fields the caller actually sent, keyed by attribute name"""
        return self.model_dump(exclude_unset=True)


class TaskStatusUpdate(CamelModel):
    status: TaskStatus


class TaskResponse(CamelModel):
    """Task as returned to clients; isOverdue is derived at read time"""
    id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    assigned_user: str
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    is_overdue: bool = False

    @field_serializer("due_date", "created_at", "updated_at")
    def serialize_utc(self, value: Optional[datetime]):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc).isoformat()

    @classmethod
    def from_task(cls, task: Task, now: Optional[datetime] = None) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            assigned_user=task.assigned_user,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
            is_overdue=task.is_overdue(now),
        )


class TaskQuery(CamelModel):
    """List parameters - every supplied filter is ANDed with the others"""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_user: Optional[str] = None  # Case-insensitive substring
    search: Optional[str] = None  # Case-insensitive substring of title or description
    due_date_from: Optional[datetime] = None  # Inclusive
    due_date_to: Optional[datetime] = None  # Inclusive
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"

    @field_validator("assigned_user", "search")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None  # Blank filter imposes no constraint

    @field_validator("due_date_from")
    @classmethod
    def normalize_date_from(cls, v):
        return to_naive_utc(v)

    @field_validator("due_date_to", mode="before")
    @classmethod
    def widen_date_only(cls, v):
        """A bare YYYY-MM-DD upper bound covers that whole day"""
        if isinstance(v, str) and DATE_ONLY_PATTERN.match(v.strip()):
            return datetime.combine(date.fromisoformat(v.strip()), time.max)
        return v

    @field_validator("due_date_to")
    @classmethod
    def check_date_range(cls, v, info: ValidationInfo):
        v = to_naive_utc(v)
        start = info.data.get("due_date_from")
        if v is not None and start is not None and start > v:
            raise ValueError("dueDateTo must not be before dueDateFrom")
        return v

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_tasks: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class TaskPage(CamelModel):
    tasks: List[TaskResponse]
    pagination: Pagination


class TaskStats(CamelModel):
    """Derived counts - computed fresh on every request"""
    total: int
    overdue: int
    by_status: Dict[str, int]  # Statuses with no tasks are omitted


class TaskData(CamelModel):
    task: TaskResponse


class TaskStatsData(CamelModel):
    stats: TaskStats
