"""
Task Repository Interface - Persistence operations the domain depends on

The services only talk to this interface, so the storage engine can be
swapped without touching query, stats or lifecycle logic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.schemas.task import TaskCreate

SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "dueDate": "due_date",
    "title": "title",
}
GROUPABLE_FIELDS = ("status", "priority", "assigned_user")


@dataclass(frozen=True)
class TaskFilter:
    """
    Predicate over tasks. Every non-None attribute is a constraint and all
    constraints are ANDed; an empty TaskFilter matches every task.
    """
    status: Optional[TaskStatus] = None
    status_not: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_user: Optional[str] = None  # Case-insensitive substring
    search: Optional[str] = None  # Case-insensitive substring of title or description
    due_date_from: Optional[datetime] = None  # due_date >= value
    due_date_to: Optional[datetime] = None  # due_date <= value
    due_before: Optional[datetime] = None  # due_date < value (overdue check)


@dataclass(frozen=True)
class TaskSort:
    field: str = "createdAt"  # One of SORTABLE_FIELDS
    order: str = "desc"  # "asc" or "desc"

    def __post_init__(self):
        if self.field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {self.field!r}")
        if self.order not in ("asc", "desc"):
            raise ValueError(f"Invalid sort order {self.order!r}")


class TaskRepository(ABC):
    """Abstract task store. Each operation is atomic for a single record."""

    @abstractmethod
    def create(self, draft: TaskCreate) -> Task:
        """Assign id and timestamps, persist and return the stored task"""

    @abstractmethod
    def find_by_id(self, task_id: UUID) -> Optional[Task]:
        """Return the task or None"""

    @abstractmethod
    def find_many(
        self, task_filter: TaskFilter, sort: TaskSort, skip: int, limit: int
    ) -> Tuple[List[Task], int]:
        """
        Return one page of matching tasks plus the total number of matches.
        Ordering is by `sort` with ties broken by id ascending.
        """

    @abstractmethod
    def update_by_id(self, task_id: UUID, fields: Dict[str, Any]) -> Optional[Task]:
        """Apply only the given fields and refresh updated_at; None if absent"""

    @abstractmethod
    def delete_by_id(self, task_id: UUID) -> bool:
        """Hard delete; False if there was nothing to delete"""

    @abstractmethod
    def count_by_group(self, group_field: str) -> Dict[str, int]:
        """Count tasks per distinct value of a groupable field"""

    @abstractmethod
    def count_where(self, task_filter: TaskFilter) -> int:
        """Count tasks matching the filter"""
