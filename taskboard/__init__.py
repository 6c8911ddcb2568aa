"""
Taskboard - Task management REST API

Usage:
    from taskboard.services import TaskService
    from taskboard.core.config import settings
"""

__version__ = "1.0.0"
