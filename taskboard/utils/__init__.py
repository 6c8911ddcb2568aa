"""
Utilities Package - Helper functions shared across layers
"""

from taskboard.utils.timeutils import utcnow, to_naive_utc

__all__ = [
    "utcnow",
    "to_naive_utc",
]
