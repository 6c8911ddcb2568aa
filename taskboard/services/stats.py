"""
Task Stats Engine - Dashboard counts derived from the live task collection
"""

from datetime import datetime

from taskboard.models.task import TaskStatus
from taskboard.repositories.base import TaskFilter, TaskRepository
from taskboard.schemas.task import TaskStats


def compute_task_stats(repository: TaskRepository, now: datetime) -> TaskStats:
    """
    Count tasks by status, in total, and overdue as of `now`.

    The three counts are separate queries issued back to back; under
    concurrent writes they may observe slightly different snapshots.
    """
    by_status = repository.count_by_group("status")
    total = repository.count_where(TaskFilter())
    overdue = repository.count_where(TaskFilter(due_before=now, status_not=TaskStatus.DONE))
    return TaskStats(total=total, overdue=overdue, by_status=by_status)
