"""
Models Package - Exports all database models for easy importing
"""

# Importing the models registers them with Base so create_all() sees every table
from taskboard.models.user import User
from taskboard.models.task import Task, TaskStatus, TaskPriority

__all__ = [
    "User",
    "Task",
    "TaskStatus",
    "TaskPriority",
]
