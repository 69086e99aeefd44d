"""Account lookup, registration and credential checks."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from essential_times.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
    verify_password,
)
from essential_times.models.base import is_row_id
from essential_times.models.user import ROLE_USER, ROLES, User
from essential_times.services.errors import ConflictError, ValidationFailedError

logger = logging.getLogger(__name__)

_dummy_hash: str | None = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_account_fields(email: str, password: str, name: str) -> None:
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        raise ValidationFailedError("A valid email is required")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationFailedError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters"
        )
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        raise ValidationFailedError("Name is required")


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    if not is_row_id(user_id):
        return None
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, email: str, password: str, name: str, role: str = ROLE_USER) -> User:
    """Insert a new account with a bcrypt-hashed password. Raises ConflictError on duplicate email."""
    email = normalize_email(email)
    name = name.strip()
    _validate_account_fields(email, password, name)
    if role not in ROLES:
        raise ValidationFailedError(f"Role must be one of: {', '.join(ROLES)}")
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already registered")
    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
        name=name,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same address.
        db.rollback()
        raise ConflictError("Email already registered") from e
    db.refresh(user)
    logger.info("Created user id=%s role=%s", user.id, user.role)
    return user


def register_user(db: Session, email: str, password: str, name: str) -> User:
    """Self-service registration; always creates a plain 'user' account."""
    return create_user(db, email, password, name, role=ROLE_USER)


def authenticate(db: Session, email: str, password: str) -> User | None:
    """
    Return the user when email and password match, else None.

    Unknown emails still pay for one bcrypt check so both failure paths look alike.
    """
    global _dummy_hash
    user = get_user_by_email(db, email)
    if user is None:
        if _dummy_hash is None:
            _dummy_hash = hash_password("not-a-real-password")
        verify_password(password, _dummy_hash)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
