"""
Authentication API - Registration, login, profile and user listing
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from taskboard.core.dependencies import get_current_user
from taskboard.core.exceptions import AuthenticationError, ValidationError
from taskboard.core.security import hash_password, verify_password, create_access_token
from taskboard.database import get_db
from taskboard.models import User
from taskboard.schemas import (
    ApiResponse,
    AuthData,
    UserCreate,
    UserData,
    UserListData,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _auth_payload(user: User) -> AuthData:
    token = create_access_token(data={"sub": str(user.id)})
    return AuthData(token=token, user=UserResponse.from_user(user))


@router.post("/register", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register new user account.

    Process:
        1. Validate input (pydantic handles this)
        2. Reject duplicate email or username
        3. Hash password and store the user
        4. Issue a JWT

    Raises:
        400: Validation failure or email/username already taken
    """
    logger.info(f"➡️  Registration attempt for email: {user_data.email}")

    errors = []
    if db.query(User).filter(User.email == user_data.email).first():
        errors.append({"field": "email", "message": "Email already registered"})
    if db.query(User).filter(User.username == user_data.username).first():
        errors.append({"field": "username", "message": "Username already taken"})
    if errors:
        logger.warning(f"⚠️  Registration failed - duplicate account: {user_data.email}")
        raise ValidationError(errors, message="User already exists")

    new_user = User(
        username=user_data.username,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # Concurrent registration won the unique index
        db.rollback()
        logger.warning(f"⚠️  Registration race lost for {user_data.email}")
        raise ValidationError.single("email", "Email or username already registered")

    logger.info(f"✅ User registered successfully: {new_user.email}")
    return ApiResponse(message="User registered successfully", data=_auth_payload(new_user))


@router.post("/login", response_model=ApiResponse[AuthData])
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate user and return a JWT.

    Raises:
        401: Unknown email or wrong password (same message for both)
    """
    logger.info(f"➡️  Login attempt for email: {credentials.email}")

    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"⚠️  Login failed for: {credentials.email}")
        raise AuthenticationError("Invalid email or password")

    logger.info(f"✅ Login successful: {user.email}")
    return ApiResponse(message="Login successful", data=_auth_payload(user))


@router.get("/me", response_model=ApiResponse[UserData])
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Current user's profile - lets the client verify a stored token"""
    return ApiResponse(data=UserData(user=UserResponse.from_user(current_user)))


@router.get("/users", response_model=ApiResponse[UserListData])
def list_users(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All users, e.g. to pick an assignee"""
    logger.info(f"➡️  List users request from: {current_user.email}")
    users = db.query(User).order_by(User.username.asc()).all()
    logger.info(f"✅ Returning {len(users)} users")
    return ApiResponse(
        message="Users retrieved successfully",
        data=UserListData(users=[UserResponse.from_user(user) for user in users]),
    )
