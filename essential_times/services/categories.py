"""Category listing and admin management."""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from essential_times.models.base import is_row_id
from essential_times.models.category import Category
from essential_times.schemas.category import CategoryIn
from essential_times.services.errors import ConflictError, NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

# Letters (any script), digits, underscore and hyphen; no slashes or whitespace.
SLUG_PATTERN = re.compile(r"^[\w-]+$")


def _clean(body: CategoryIn) -> tuple[str, str, int]:
    name = body.name.strip()
    slug = body.slug.strip()
    if not name or not slug:
        raise ValidationFailedError("Name and slug are required")
    if not SLUG_PATTERN.match(slug):
        raise ValidationFailedError("Slug may only contain letters, digits, '-' and '_'")
    return name, slug.lower(), body.display_order


def _ensure_unique(db: Session, name: str, slug: str, exclude_id: int | None = None) -> None:
    query = db.query(Category).filter((Category.name == name) | (Category.slug == slug))
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("Category name or slug already exists")


def list_categories(db: Session) -> list[Category]:
    """All categories by display_order ascending; ties keep insertion order."""
    return db.query(Category).order_by(Category.display_order.asc(), Category.id.asc()).all()


def get_category_by_slug(db: Session, slug: str) -> Category | None:
    return db.query(Category).filter(Category.slug == slug.strip().lower()).first()


def get_category(db: Session, category_id: int) -> Category | None:
    if not is_row_id(category_id):
        return None
    return db.query(Category).filter(Category.id == category_id).first()


def _commit(db: Session, category: Category) -> Category:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Category name or slug already exists") from e
    db.refresh(category)
    return category


def create_category(db: Session, body: CategoryIn) -> Category:
    name, slug, display_order = _clean(body)
    _ensure_unique(db, name, slug)
    category = Category(name=name, slug=slug, display_order=display_order)
    db.add(category)
    category = _commit(db, category)
    logger.info("Created category id=%s slug=%s", category.id, category.slug)
    return category


def update_category(db: Session, category_id: int, body: CategoryIn) -> Category:
    """Replace name, slug and display_order of an existing category."""
    category = get_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    name, slug, display_order = _clean(body)
    _ensure_unique(db, name, slug, exclude_id=category_id)
    category.name = name
    category.slug = slug
    category.display_order = display_order
    category = _commit(db, category)
    logger.info("Updated category id=%s slug=%s", category.id, category.slug)
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete by id. Articles that referenced it keep the stale id and read as uncategorized."""
    category = get_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    db.delete(category)
    db.commit()
    logger.info("Deleted category id=%s", category_id)
