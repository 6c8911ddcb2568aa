"""
Tasks API - Task CRUD, status changes, filtered listing and stats
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import logging

from taskboard.core.dependencies import get_current_user, get_task_service
from taskboard.schemas import (
    ApiResponse,
    MessageResponse,
    TaskCreate,
    TaskData,
    TaskPage,
    TaskQuery,
    TaskStatsData,
    TaskStatusUpdate,
    TaskUpdate,
)
from taskboard.services import TaskService
from taskboard.services.task_service import validate_model

logger = logging.getLogger(__name__)

# Every task endpoint requires an authenticated user; any user may act on any task
router = APIRouter(dependencies=[Depends(get_current_user)])


def task_query_params(
    status_filter: Optional[str] = Query(None, alias="status", description="todo, in-progress, in-review or done"),
    priority: Optional[str] = Query(None, description="LOW, MEDIUM or HIGH"),
    assigned_user: Optional[str] = Query(None, alias="assignedUser", description="Partial, case-insensitive"),
    search: Optional[str] = Query(None, description="Matches title or description"),
    due_date_from: Optional[str] = Query(None, alias="dueDateFrom"),
    due_date_to: Optional[str] = Query(None, alias="dueDateTo"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size, 1-100"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="createdAt, updatedAt, dueDate or title"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
) -> TaskQuery:
    """Collect list parameters; TaskQuery is the single place they are validated"""
    raw = {
        "status": status_filter,
        "priority": priority,
        "assignedUser": assigned_user,
        "search": search,
        "dueDateFrom": due_date_from,
        "dueDateTo": due_date_to,
        "page": page,
        "limit": limit,
        "sortBy": sort_by,
        "sortOrder": sort_order,
    }
    return validate_model(TaskQuery, {key: value for key, value in raw.items() if value is not None})


@router.post("", response_model=ApiResponse[TaskData], status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, service: TaskService = Depends(get_task_service)):
    """
    Create a task.

    title and assignedUser are required; status defaults to todo and
    priority to MEDIUM. A dueDate in the past is rejected.
    """
    task = service.create_task(task_data)
    return ApiResponse(message="Task created successfully", data=TaskData(task=task))


@router.get("", response_model=ApiResponse[TaskPage])
def list_tasks(
    query: TaskQuery = Depends(task_query_params),
    service: TaskService = Depends(get_task_service),
):
    """
    List tasks with filtering, search, sorting and pagination.

    Filters are combined with AND. Requesting a page past the last one
    returns an empty list with accurate pagination metadata.
    """
    page = service.list_tasks(query)
    return ApiResponse(message="Tasks retrieved successfully", data=page)


@router.get("/stats", response_model=ApiResponse[TaskStatsData])
def get_task_stats(service: TaskService = Depends(get_task_service)):
    """Total, overdue and per-status counts, computed fresh on every call"""
    stats = service.get_stats()
    return ApiResponse(message="Task statistics retrieved successfully", data=TaskStatsData(stats=stats))


@router.get("/{task_id}", response_model=ApiResponse[TaskData])
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """
    Raises:
        400: Malformed task ID
        404: Task not found
    """
    task = service.get_task(task_id)
    return ApiResponse(message="Task retrieved successfully", data=TaskData(task=task))


@router.put("/{task_id}", response_model=ApiResponse[TaskData])
def update_task(task_id: str, task_data: TaskUpdate, service: TaskService = Depends(get_task_service)):
    """Partial update - omitted fields are left untouched"""
    task = service.update_task(task_id, task_data)
    return ApiResponse(message="Task updated successfully", data=TaskData(task=task))


@router.patch("/{task_id}/status", response_model=ApiResponse[TaskData])
def change_task_status(
    task_id: str,
    body: TaskStatusUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Move a task to any status"""
    task = service.change_status(task_id, body.status)
    return ApiResponse(message="Task status updated successfully", data=TaskData(task=task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Hard delete; a second delete of the same ID returns 404"""
    service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")
