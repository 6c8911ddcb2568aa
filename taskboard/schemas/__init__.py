"""
Schemas Package - Exports all Pydantic schemas
"""

from taskboard.schemas.common import ApiResponse, CamelModel, MessageResponse
from taskboard.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    AuthData,
    UserData,
    UserListData,
)
from taskboard.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskStatusUpdate,
    TaskResponse,
    TaskQuery,
    Pagination,
    TaskPage,
    TaskStats,
    TaskData,
    TaskStatsData,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "MessageResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "AuthData",
    "UserData",
    "UserListData",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskResponse",
    "TaskQuery",
    "Pagination",
    "TaskPage",
    "TaskStats",
    "TaskData",
    "TaskStatsData",
]
