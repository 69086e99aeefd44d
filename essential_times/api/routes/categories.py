"""Category endpoints: public listing and admin management."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from essential_times.api.errors import http_error
from essential_times.api.routes.auth import require_admin
from essential_times.core.database import get_db
from essential_times.schemas.article import MessageResponse
from essential_times.schemas.auth import CurrentUser
from essential_times.schemas.category import CategoryIn, CategoryOut
from essential_times.services import categories as category_service
from essential_times.services.errors import ServiceError

router = APIRouter()


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(db: Annotated[Session, Depends(get_db)]) -> list[CategoryOut]:
    """All categories by display order."""
    return [CategoryOut.model_validate(c) for c in category_service.list_categories(db)]


@router.get("/admin/categories", response_model=list[CategoryOut])
def admin_list_categories(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in category_service.list_categories(db)]


@router.post("/admin/categories", response_model=CategoryOut, status_code=201)
def create_category(
    body: CategoryIn,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> CategoryOut:
    try:
        return CategoryOut.model_validate(category_service.create_category(db, body))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/admin/categories/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    body: CategoryIn,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> CategoryOut:
    """Replace name, slug and display order of a category."""
    try:
        return CategoryOut.model_validate(category_service.update_category(db, category_id, body))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/admin/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    """Delete a category. Articles in it become uncategorized."""
    try:
        category_service.delete_category(db, category_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Category deleted successfully")
