"""Request/response schemas for article endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ArticleOut(BaseModel):
    """Article record as returned to clients, enriched with the category name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author_id: int
    author_name: str
    category_id: int | None = None
    category_name: str | None = None
    image_url: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    """Page counters; total is ceil(matching / limit)."""

    current: int = Field(..., ge=1, description="Requested page number")
    total: int = Field(..., ge=0, description="Total number of pages")
    hasNext: bool
    hasPrev: bool


class ArticlePage(BaseModel):
    """One page of published articles."""

    articles: list[ArticleOut]
    pagination: Pagination


class ArticleUpdated(BaseModel):
    message: str
    article: ArticleOut


class MessageResponse(BaseModel):
    message: str
