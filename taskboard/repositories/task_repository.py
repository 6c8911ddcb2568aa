"""
SQLAlchemy Task Repository - TaskRepository backed by the ORM session
"""

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID
import enum
import logging

from taskboard.models.task import Task
from taskboard.repositories.base import (
    GROUPABLE_FIELDS,
    SORTABLE_FIELDS,
    TaskFilter,
    TaskRepository,
    TaskSort,
)
from taskboard.schemas.task import TaskCreate
from taskboard.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "assigned_user", "due_date")


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in user input escaped"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlTaskRepository(TaskRepository):
    """Task store on a relational database - one instance per request session"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("❌ Task repository commit failed", exc_info=True)
            raise

    def _apply_filter(self, query, task_filter: TaskFilter):
        if task_filter.status is not None:
            query = query.filter(Task.status == task_filter.status)
        if task_filter.status_not is not None:
            query = query.filter(Task.status != task_filter.status_not)
        if task_filter.priority is not None:
            query = query.filter(Task.priority == task_filter.priority)
        if task_filter.assigned_user:
            query = query.filter(
                Task.assigned_user.ilike(_like_pattern(task_filter.assigned_user), escape="\\")
            )
        if task_filter.search:
            pattern = _like_pattern(task_filter.search)
            query = query.filter(
                or_(
                    Task.title.ilike(pattern, escape="\\"),
                    Task.description.ilike(pattern, escape="\\"),
                )
            )
        if task_filter.due_date_from is not None:
            query = query.filter(Task.due_date >= task_filter.due_date_from)
        if task_filter.due_date_to is not None:
            query = query.filter(Task.due_date <= task_filter.due_date_to)
        if task_filter.due_before is not None:
            query = query.filter(Task.due_date < task_filter.due_before)
        return query

    def _order_by(self, query, sort: TaskSort):
        column = getattr(Task, SORTABLE_FIELDS[sort.field])
        ordering = []
        if sort.field == "dueDate":
            ordering.append(Task.due_date.is_(None))  # Tasks without due date last, both directions
        ordering.append(column.asc() if sort.order == "asc" else column.desc())
        ordering.append(Task.id.asc())  # Deterministic tie-break
        return query.order_by(*ordering)

    def create(self, draft: TaskCreate) -> Task:
        now = utcnow()
        task = Task(
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            assigned_user=draft.assigned_user,
            due_date=draft.due_date,
            created_at=now,
            updated_at=now,
        )
        self.db.add(task)
        self._commit()
        self.db.refresh(task)
        logger.debug(f"💾 Stored task {task.id}")
        return task

    def find_by_id(self, task_id: UUID) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def find_many(
        self, task_filter: TaskFilter, sort: TaskSort, skip: int, limit: int
    ) -> Tuple[List[Task], int]:
        query = self._apply_filter(self.db.query(Task), task_filter)
        total = query.count()
        tasks = self._order_by(query, sort).offset(skip).limit(limit).all()
        return tasks, total

    def update_by_id(self, task_id: UUID, fields: Dict[str, Any]) -> Optional[Task]:
        task = self.find_by_id(task_id)
        if task is None:
            return None
        for field, value in fields.items():
            if field not in UPDATABLE_FIELDS:
                raise ValueError(f"Field {field!r} cannot be updated")
            setattr(task, field, value)
        # updated_at must strictly increase even when two writes share a clock tick
        now = utcnow()
        task.updated_at = max(now, task.updated_at + timedelta(microseconds=1))
        self._commit()
        self.db.refresh(task)
        return task

    def delete_by_id(self, task_id: UUID) -> bool:
        task = self.find_by_id(task_id)
        if task is None:
            return False
        self.db.delete(task)
        self._commit()
        return True

    def count_by_group(self, group_field: str) -> Dict[str, int]:
        if group_field not in GROUPABLE_FIELDS:
            raise ValueError(f"Cannot group by {group_field!r}")
        column = getattr(Task, group_field)
        rows = self.db.query(column, func.count(Task.id)).group_by(column).all()
        counts = {}
        for value, count in rows:
            key = value.value if isinstance(value, enum.Enum) else value
            counts[key] = count
        return counts

    def count_where(self, task_filter: TaskFilter) -> int:
        return self._apply_filter(self.db.query(Task), task_filter).count()
