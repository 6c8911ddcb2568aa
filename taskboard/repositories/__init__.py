"""
Repositories Package - Task persistence behind an abstract interface
"""

from taskboard.repositories.base import TaskFilter, TaskRepository, TaskSort
from taskboard.repositories.task_repository import SqlTaskRepository

__all__ = [
    "TaskFilter",
    "TaskRepository",
    "TaskSort",
    "SqlTaskRepository",
]
