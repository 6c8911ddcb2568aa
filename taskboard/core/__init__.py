"""
Core Package - Configuration, security, and error types

IMPORTANT: Only import config, exceptions and security here.
Dependencies must be imported directly to avoid circular imports.
"""

from taskboard.core.config import settings, get_settings
from taskboard.core.exceptions import (
    TaskboardError,
    ValidationError,
    NotFoundError,
    InvalidIdentifierError,
    AuthenticationError,
    AuthorizationError,
    InternalError,
)
from taskboard.core.security import hash_password, verify_password, create_access_token, decode_token

__all__ = [
    "settings",
    "get_settings",
    "TaskboardError",
    "ValidationError",
    "NotFoundError",
    "InvalidIdentifierError",
    "AuthenticationError",
    "AuthorizationError",
    "InternalError",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
]
