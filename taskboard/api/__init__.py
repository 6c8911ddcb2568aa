"""
API Package - Exports all API routers
"""

from taskboard.api import auth, tasks

__all__ = ["auth", "tasks"]
