"""
Security Module - Handles password hashing and JWT token generation/validation
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
import logging

from taskboard.core.config import settings

logger = logging.getLogger(__name__)

# Password hashing context - bcrypt with configurable cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",  # Automatically upgrade old hashes
    bcrypt__rounds=settings.BCRYPT_ROUNDS,  # Lowered in tests, 12 by default
)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    bcrypt salts every hash, so equal passwords produce different hashes.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a bcrypt hash.

    Returns False (never raises) for corrupted or unknown hash formats.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"❌ Password verification error: {str(e)}")
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode (typically {"sub": user_id})
        expires_delta: Optional custom lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Signed JWT string

    Example:
        token = create_access_token({"sub": str(user.id)})
    """
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    logger.debug(f"✅ Created access token expiring at {expire}")
    return encoded_jwt


def verify_token(token: str) -> Optional[dict]:
    """
    Verify signature and expiry of a JWT.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("⚠️  Token expired")
        return None
    except JWTError as e:
        logger.warning(f"⚠️  Invalid token: {str(e)}")
        return None


def decode_token(token: str) -> Optional[str]:
    """Return the subject (user ID) of a valid token, None otherwise"""
    payload = verify_token(token)
    if payload:
        return payload.get("sub")
    return None
