"""ORM model for news articles."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from essential_times.models.base import Base

STATUS_PUBLISHED = "published"


class Article(Base):
    """
    A news article written by a reporter or admin.

    author_name is copied from the author at creation time and is not kept in
    sync afterwards. category_id is not a foreign key: deleting a category
    leaves articles pointing at a missing row, which readers treat as
    uncategorized.
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    author_name = Column(String(100), nullable=False)
    category_id = Column(Integer, nullable=True, index=True)
    image_url = Column(String(1024), nullable=True)
    status = Column(String(32), nullable=False, default=STATUS_PUBLISHED, index=True)
    # Set in Python so ordering has sub-second resolution on SQLite too.
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
