"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy.orm import DeclarativeBase

# Upper bound of the Integer id columns on every supported backend (PostgreSQL int4).
MAX_ROW_ID = 2**31 - 1


def is_row_id(value: int) -> bool:
    """True when value can name a stored row; anything else can only be "not found"."""
    return 1 <= value <= MAX_ROW_ID


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
