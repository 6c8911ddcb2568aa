"""
User Schemas - Pydantic models for request/response validation
"""

from pydantic import EmailStr, field_serializer, field_validator
from typing import List, Optional
from datetime import datetime, timezone
from uuid import UUID
import re

from taskboard.schemas.common import CamelModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class UserCreate(CamelModel):
    """Schema for user registration - requires password"""
    username: str
    email: EmailStr
    password: str  # Plaintext, hashed before storage

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        if len(v) > 30:
            raise ValueError("Username cannot exceed 30 characters")
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username may only contain letters, digits, '.', '_' and '-'")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()  # Emails are unique case-insensitively

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Enforce password strength requirements"""
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password cannot exceed 72 bytes")  # bcrypt limit
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char.isupper() for char in v):
            raise ValueError("Password must contain at least one uppercase letter")
        return v


class UserLogin(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class UserResponse(CamelModel):
    """User data in responses - never includes the password hash"""
    id: UUID
    username: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_utc(self, value: Optional[datetime]):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc).isoformat()

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthData(CamelModel):
    """Token plus profile, returned by register and login"""
    token: str
    token_type: str = "bearer"
    user: UserResponse


class UserData(CamelModel):
    user: UserResponse


class UserListData(CamelModel):
    users: List[UserResponse]
