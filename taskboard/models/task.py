"""
Task Model - Represents work items in the system
"""

from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum, Index, Uuid
from datetime import datetime
from typing import Optional
import enum
import uuid

from taskboard.database import Base
from taskboard.utils.timeutils import utcnow


class TaskStatus(str, enum.Enum):
    """Task status - a label, any status may move to any other"""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    IN_REVIEW = "in-review"
    DONE = "done"


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Task(Base):
    """
    Task table - stores work items and their metadata.
    Overdue-ness is never stored; see is_overdue().
    """
    __tablename__ = "tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Task content
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)  # Up to 1000 chars, enforced by schemas

    # Task metadata
    status = Column(
        SQLEnum(TaskStatus, values_callable=_enum_values, native_enum=False, length=20),
        default=TaskStatus.TODO,
        nullable=False,
    )
    priority = Column(
        SQLEnum(TaskPriority, values_callable=_enum_values, native_enum=False, length=10),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )
    assigned_user = Column(String(100), nullable=False)  # Free-form assignee (username or name)
    due_date = Column(DateTime, nullable=True)

    # Timestamps - naive UTC
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_tasks_assigned_user_status", "assigned_user", "status"),
        Index("ix_tasks_due_date", "due_date"),
        Index("ix_tasks_created_at", created_at.desc()),
    )

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Due date has passed and the task is not done - computed, never persisted"""
        if self.due_date is None or self.status == TaskStatus.DONE:
            return False
        return self.due_date < (now or utcnow())

    def __repr__(self):
        return f"<Task {self.id}: {self.title} ({self.status})>"
