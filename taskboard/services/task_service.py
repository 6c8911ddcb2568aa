"""
Task Lifecycle Service - Validated create/read/update/delete/status-change

Sits between the HTTP layer and the repository: validates input, enforces
field rules, and turns repository outcomes into domain errors. Status is a
label, not a workflow: any status may move to any other.
"""

from pydantic import BaseModel, ValidationError as PydanticValidationError
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union
from uuid import UUID
import logging

from taskboard.core.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
    field_errors,
)
from taskboard.models.task import Task, TaskStatus
from taskboard.repositories.base import TaskRepository
from taskboard.schemas.task import (
    TaskCreate,
    TaskPage,
    TaskQuery,
    TaskResponse,
    TaskStats,
    TaskUpdate,
)
from taskboard.services.query import run_task_query
from taskboard.services.stats import compute_task_stats
from taskboard.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DRAFT_FIELDS = ("title", "description", "status", "priority", "assigned_user", "due_date")


def parse_task_id(task_id: Union[str, UUID]) -> UUID:
    """Parse a task identifier; malformed ids are rejected before any lookup"""
    if isinstance(task_id, UUID):
        return task_id
    try:
        return UUID(str(task_id))
    except (TypeError, ValueError):
        logger.warning(f"⚠️  Rejected malformed task ID: {task_id!r}")
        raise InvalidIdentifierError("Invalid task ID format")


def validate_model(model: Type[ModelT], data: Any, context: Optional[Dict[str, Any]] = None) -> ModelT:
    """Validate into `model`, reporting every violation as one ValidationError"""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model.model_validate(data, context=context)
    except PydanticValidationError as e:
        raise ValidationError(field_errors(e.errors(include_url=False)))


class TaskService:
    """
    Task lifecycle controller.

    Args:
        repository: Task store to delegate persistence to
        clock: Returns the current naive-UTC time; used for the due-date rule
            and for overdue computation
    """

    def __init__(self, repository: TaskRepository, clock: Callable[[], datetime] = utcnow):
        self.repository = repository
        self.clock = clock

    def _get_existing(self, task_id: UUID) -> Task:
        task = self.repository.find_by_id(task_id)
        if task is None:
            logger.warning(f"⚠️  Task {task_id} not found")
            raise NotFoundError("Task not found")
        return task

    def create_task(self, payload: Union[TaskCreate, Dict[str, Any]]) -> TaskResponse:
        """Validate a draft, apply defaults and persist it"""
        now = self.clock()
        try:
            draft = validate_model(TaskCreate, payload, context={"now": now})
        except ValidationError as e:
            logger.warning(f"⚠️  Task creation rejected: {e.errors}")
            raise
        task = self.repository.create(draft)
        logger.info(f"✅ Task created: {task.id} '{task.title}'")
        return TaskResponse.from_task(task, now)

    def get_task(self, task_id: Union[str, UUID]) -> TaskResponse:
        task = self._get_existing(parse_task_id(task_id))
        return TaskResponse.from_task(task, self.clock())

    def list_tasks(self, query: Union[TaskQuery, Dict[str, Any], None] = None) -> TaskPage:
        """Filtered, sorted, paginated list - an empty page is not an error"""
        if not isinstance(query, TaskQuery):
            query = validate_model(TaskQuery, query or {})
        page = run_task_query(self.repository, query, self.clock())
        logger.info(
            f"✅ Returning {len(page.tasks)} tasks "
            f"(page {page.pagination.current_page}/{page.pagination.total_pages}, "
            f"total: {page.pagination.total_tasks})"
        )
        return page

    def update_task(
        self, task_id: Union[str, UUID], payload: Union[TaskUpdate, Dict[str, Any]]
    ) -> TaskResponse:
        """
        Apply a partial update.

        Only supplied fields change. The merged record is re-validated; the
        due-date rule only applies when dueDate itself is being written.
        """
        uid = parse_task_id(task_id)
        now = self.clock()
        update = validate_model(TaskUpdate, payload, context={"now": now})
        supplied = update.supplied_fields()
        existing = self._get_existing(uid)

        merged = {field: getattr(existing, field) for field in DRAFT_FIELDS}
        merged.update(supplied)
        draft = validate_model(
            TaskCreate,
            merged,
            context={"now": now, "check_due_date": "due_date" in supplied},
        )

        changes = {field: getattr(draft, field) for field in supplied}
        task = self.repository.update_by_id(uid, changes)
        if task is None:  # Deleted between the read and the write
            raise NotFoundError("Task not found")
        logger.info(f"✅ Task {uid} updated ({', '.join(changes) or 'no fields'})")
        return TaskResponse.from_task(task, now)

    def change_status(self, task_id: Union[str, UUID], status: Union[TaskStatus, str]) -> TaskResponse:
        """Update that touches only status (and updatedAt)"""
        return self.update_task(task_id, {"status": status})

    def delete_task(self, task_id: Union[str, UUID]) -> None:
        """Hard delete - irreversible"""
        uid = parse_task_id(task_id)
        if not self.repository.delete_by_id(uid):
            logger.warning(f"⚠️  Task {uid} not found for deletion")
            raise NotFoundError("Task not found")
        logger.info(f"🗑️  Task {uid} deleted")

    def get_stats(self) -> TaskStats:
        stats = compute_task_stats(self.repository, self.clock())
        logger.info(f"📊 Task stats: total={stats.total}, overdue={stats.overdue}")
        return stats
