"""Pydantic request/response schemas."""

from essential_times.schemas.article import (
    ArticleOut,
    ArticlePage,
    ArticleUpdated,
    MessageResponse,
    Pagination,
)
from essential_times.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserPublic,
)
from essential_times.schemas.category import CategoryIn, CategoryOut
from essential_times.schemas.health import HealthResponse

__all__ = [
    "ArticleOut",
    "ArticlePage",
    "ArticleUpdated",
    "CategoryIn",
    "CategoryOut",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "RegisterRequest",
    "TokenResponse",
    "UserPublic",
]
