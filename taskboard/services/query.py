"""
Task Query Engine - Turns list parameters into one deterministic page
"""

from datetime import datetime
from typing import Optional
import math

from taskboard.repositories.base import TaskFilter, TaskRepository, TaskSort
from taskboard.schemas.task import Pagination, TaskPage, TaskQuery, TaskResponse


def build_filter(query: TaskQuery) -> TaskFilter:
    return TaskFilter(
        status=query.status,
        priority=query.priority,
        assigned_user=query.assigned_user,
        search=query.search,
        due_date_from=query.due_date_from,
        due_date_to=query.due_date_to,
    )


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_tasks=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        limit=limit,
    )


def run_task_query(
    repository: TaskRepository, query: TaskQuery, now: Optional[datetime] = None
) -> TaskPage:
    """
    Execute a validated TaskQuery.

    A page past the last one is not an error: it yields no tasks with the
    pagination metadata still describing the full result set.
    """
    tasks, total = repository.find_many(
        build_filter(query),
        TaskSort(field=query.sort_by, order=query.sort_order),
        skip=query.skip,
        limit=query.limit,
    )
    return TaskPage(
        tasks=[TaskResponse.from_task(task, now) for task in tasks],
        pagination=build_pagination(query.page, query.limit, total),
    )
