"""
User Model - Represents authenticated users in the system
"""

from sqlalchemy import Column, String, DateTime, Uuid
import uuid

from taskboard.database import Base
from taskboard.utils.timeutils import utcnow


class User(Base):
    """
    User table - stores authentication and profile information.
    Tasks reference users loosely through Task.assigned_user.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Authentication fields
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)  # bcrypt hash, never returned

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.username} ({self.email})>"
