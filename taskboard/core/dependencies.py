"""
FastAPI Dependencies - Reusable dependency injection functions
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from taskboard.core.exceptions import AuthenticationError
from taskboard.core.security import decode_token
from taskboard.database import get_db
from taskboard.models import User
from taskboard.repositories import SqlTaskRepository
from taskboard.services import TaskService

logger = logging.getLogger(__name__)

# Expects "Authorization: Bearer <token>"; missing header is reported as 401 below
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a user.

    Process:
        1. Extract token from Authorization header
        2. Verify token signature and expiration
        3. Load the user named by the token's subject

    Raises:
        AuthenticationError: Token missing, invalid, expired, or user gone
    """
    if credentials is None or not credentials.credentials:
        logger.warning("⚠️  Request without bearer token")
        raise AuthenticationError("Access token is required")

    user_id = decode_token(credentials.credentials)
    if not user_id:
        raise AuthenticationError("Invalid or expired token")

    try:
        user = db.get(User, UUID(user_id))
    except ValueError:
        user = None  # Subject is not a UUID - treat like an unknown user
    if not user:
        logger.warning(f"⚠️  Token valid but user {user_id} not found")
        raise AuthenticationError("User no longer exists")

    logger.debug(f"✅ Authenticated user: {user.email}")
    return user


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Task lifecycle service bound to this request's session"""
    return TaskService(SqlTaskRepository(db))
