"""Article endpoints: public listings and detail, author/admin mutation, scoped listings."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from essential_times.api.errors import http_error
from essential_times.api.routes.auth import get_current_user, require_admin, require_writer
from essential_times.core.config import get_settings
from essential_times.core.database import get_db
from essential_times.schemas.article import (
    ArticleOut,
    ArticlePage,
    ArticleUpdated,
    MessageResponse,
)
from essential_times.schemas.auth import CurrentUser
from essential_times.services import articles as article_service
from essential_times.services.errors import ServiceError, ValidationFailedError
from essential_times.services.images import ImageStore, get_image_store
from essential_times.services.pagination import parse_page_params

router = APIRouter()

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _page_params(page: str | None, limit: str | None) -> tuple[int, int]:
    settings = get_settings()
    return parse_page_params(page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)


def _has_file(image: UploadFile | None) -> bool:
    # Browsers send an empty part with no filename when no file is chosen.
    return image is not None and bool(image.filename)


async def _store_image(images: ImageStore, image: UploadFile | None) -> str | None:
    if not _has_file(image):
        return None
    # One byte past the limit is enough to tell an oversize upload apart.
    data = await image.read(images.max_bytes + 1)
    try:
        return images.save(data, image.filename, image.content_type)
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/articles", response_model=ArticlePage)
def list_articles(
    db: Annotated[Session, Depends(get_db)],
    page: str | None = None,
    limit: str | None = None,
) -> ArticlePage:
    """Published articles, newest first, with pagination counters."""
    page_no, page_size = _page_params(page, limit)
    return article_service.list_published(db, page_no, page_size)


@router.get("/categories/{slug}/articles", response_model=ArticlePage)
def list_category_articles(
    slug: str,
    db: Annotated[Session, Depends(get_db)],
    page: str | None = None,
    limit: str | None = None,
) -> ArticlePage:
    """Published articles in one category (addressed by slug). 404 for unknown slugs."""
    page_no, page_size = _page_params(page, limit)
    try:
        return article_service.list_published_in_category(db, slug, page_no, page_size)
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/articles/{article_id}", response_model=ArticleOut)
def get_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ArticleOut:
    """A single published article; anything else is 404."""
    try:
        return article_service.get_published(db, article_id)
    except ServiceError as e:
        raise http_error(e) from e


@router.post("/articles", response_model=ArticleOut, status_code=201)
async def create_article(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(require_writer)],
    images: Annotated[ImageStore, Depends(get_image_store)],
    title: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    category_id: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ArticleOut:
    """
    Create a published article from a multipart form.
    Reporters and admins only: plain reader accounts may not publish.

    - **title**, **content**: required, non-blank
    - **category_id**: optional id of an existing category
    - **image**: optional image file (image/* only, size limited)
    """
    try:
        if not title or not title.strip() or not content or not content.strip():
            raise ValidationFailedError("Title and content are required")
        category = article_service.parse_category_id(db, category_id)
    except ServiceError as e:
        raise http_error(e) from e

    image_url = await _store_image(images, image)
    try:
        return article_service.create_article(db, user, title, content, category, image_url)
    except SQLAlchemyError:
        images.discard(image_url)
        raise


@router.put("/articles/{article_id}", response_model=ArticleUpdated)
async def update_article(
    article_id: int,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    images: Annotated[ImageStore, Depends(get_image_store)],
    title: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ArticleUpdated:
    """
    Partially update an article (author or admin). Omitted fields keep their values;
    an empty category_id clears the category; a new image replaces the old file.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type and not content_type.startswith(FORM_CONTENT_TYPES):
        raise HTTPException(
            status_code=415,
            detail="Content-Type must be multipart/form-data or application/x-www-form-urlencoded.",
        )
    # Read category_id from the raw form: an empty value (clear) must differ from absent.
    category_id = (await request.form()).get("category_id")
    try:
        article = article_service.get_editable(db, article_id, user)
        category = (
            article_service.UNCHANGED
            if category_id is None
            else article_service.parse_category_id(db, category_id)
        )
    except ServiceError as e:
        raise http_error(e) from e

    previous_image = article.image_url
    image_url = await _store_image(images, image)
    try:
        updated = article_service.update_article(
            db, article, title=title, content=content, category_id=category, image_url=image_url
        )
    except SQLAlchemyError:
        images.discard(image_url)
        raise
    if image_url:
        images.discard(previous_image)
    return ArticleUpdated(message="Article updated successfully", article=updated)


@router.delete("/articles/{article_id}", response_model=MessageResponse)
def delete_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    images: Annotated[ImageStore, Depends(get_image_store)],
) -> MessageResponse:
    """Permanently delete an article (author or admin) and its stored image."""
    try:
        article = article_service.get_editable(db, article_id, user)
    except ServiceError as e:
        raise http_error(e) from e
    image_url = article.image_url
    article_service.delete_article(db, article)
    images.discard(image_url)
    return MessageResponse(message="Article deleted successfully")


@router.get("/my-articles", response_model=list[ArticleOut])
def list_my_articles(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[ArticleOut]:
    """The caller's own articles, any status, newest first."""
    return article_service.list_by_author(db, user.id)


@router.get("/admin/articles", response_model=list[ArticleOut])
def list_all_articles(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> list[ArticleOut]:
    """Every article regardless of status (admin only)."""
    return article_service.list_all(db)
