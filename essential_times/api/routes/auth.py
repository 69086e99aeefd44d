"""JWT login, registration and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from essential_times.api.errors import http_error
from essential_times.core.database import get_db
from essential_times.core.security import create_access_token, decode_access_token
from essential_times.models.user import ROLE_ADMIN, ROLE_REPORTER
from essential_times.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserPublic,
)
from essential_times.services.errors import ServiceError
from essential_times.services.users import authenticate, get_user_by_id, register_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT and the public profile.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate(db, body.email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = create_access_token(user.id, user.email, user.role, user.name)
    return TokenResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/register", response_model=UserPublic, status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Create a reader account. The role is always 'user'."""
    try:
        user = register_user(db, body.email, body.password, body.name)
    except ServiceError as e:
        raise http_error(e) from e
    return UserPublic.model_validate(user)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Access token required")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = get_user_by_id(db, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def require_writer(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """
    Dependency: require a reporter or admin. Raises 403 for plain readers.

    Publishing is narrower than "any signed-in account" on purpose: self-registered
    users are readers and never write articles.
    """
    if current_user.role not in (ROLE_REPORTER, ROLE_ADMIN):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Reporter or admin access required",
        )
    return current_user
