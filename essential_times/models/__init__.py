"""SQLAlchemy ORM models."""

from essential_times.models.article import Article
from essential_times.models.base import Base
from essential_times.models.category import Category
from essential_times.models.user import User

__all__ = ["Article", "Base", "Category", "User"]
