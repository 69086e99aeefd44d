"""ORM model for accounts (readers, reporters, administrators)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from essential_times.models.base import Base

ROLE_USER = "user"
ROLE_REPORTER = "reporter"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_REPORTER, ROLE_ADMIN)


class User(Base):
    """
    Account used for JWT authentication and role-based access control.

    role: 'user', 'reporter' or 'admin'; fixed once the account exists.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    name = Column(String(100), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
