"""ORM model for article categories."""

from sqlalchemy import Column, DateTime, Integer, String, func

from essential_times.models.base import Base


class Category(Base):
    """Named section of the site; listed in ascending display_order."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
