"""
Services Package - Task query, stats and lifecycle logic
"""

from taskboard.services.query import run_task_query
from taskboard.services.stats import compute_task_stats
from taskboard.services.task_service import TaskService, parse_task_id

__all__ = [
    "run_task_query",
    "compute_task_stats",
    "TaskService",
    "parse_task_id",
]
