"""Article listing, retrieval and author/admin-scoped mutation."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Query, Session

from essential_times.models.article import STATUS_PUBLISHED, Article
from essential_times.models.base import is_row_id
from essential_times.models.category import Category
from essential_times.models.user import ROLE_ADMIN
from essential_times.schemas.article import ArticleOut, ArticlePage
from essential_times.schemas.auth import CurrentUser
from essential_times.services.categories import get_category, get_category_by_slug
from essential_times.services.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from essential_times.services.pagination import build_pagination, page_offset

logger = logging.getLogger(__name__)

# Sentinel for "field not supplied" in partial updates.
UNCHANGED = object()


def _newest_first(query: Query) -> Query:
    return query.order_by(Article.created_at.desc(), Article.id.desc())


def _category_names(db: Session, articles: list[Article]) -> dict[int, str]:
    ids = {a.category_id for a in articles if a.category_id is not None}
    if not ids:
        return {}
    rows = db.query(Category.id, Category.name).filter(Category.id.in_(ids)).all()
    return {row.id: row.name for row in rows}


def to_article_out(article: Article, category_names: dict[int, str]) -> ArticleOut:
    """Serialize an article; a missing or deleted category reads as uncategorized."""
    out = ArticleOut.model_validate(article)
    out.category_name = category_names.get(article.category_id) if article.category_id else None
    return out


def _enrich(db: Session, articles: list[Article]) -> list[ArticleOut]:
    names = _category_names(db, articles)
    return [to_article_out(a, names) for a in articles]


def _page(db: Session, query: Query, page: int, limit: int) -> ArticlePage:
    total_count = query.count()
    offset = page_offset(page, limit)
    # Past the last page: nothing to fetch, and the offset may not fit the driver.
    rows = [] if offset >= total_count else _newest_first(query).offset(offset).limit(limit).all()
    return ArticlePage(
        articles=_enrich(db, rows),
        pagination=build_pagination(page, limit, total_count),
    )


def list_published(db: Session, page: int, limit: int) -> ArticlePage:
    """One page of published articles, newest first."""
    query = db.query(Article).filter(Article.status == STATUS_PUBLISHED)
    return _page(db, query, page, limit)


def list_published_in_category(db: Session, slug: str, page: int, limit: int) -> ArticlePage:
    """One page of published articles in the category with this slug. Raises NotFoundError for unknown slugs."""
    category = get_category_by_slug(db, slug)
    if category is None:
        raise NotFoundError("Category not found")
    query = db.query(Article).filter(
        Article.status == STATUS_PUBLISHED,
        Article.category_id == category.id,
    )
    return _page(db, query, page, limit)


def get_published(db: Session, article_id: int) -> ArticleOut:
    """Return a published article; unpublished ones are reported as not found, even to their author."""
    if not is_row_id(article_id):
        raise NotFoundError("Article not found")
    article = (
        db.query(Article)
        .filter(Article.id == article_id, Article.status == STATUS_PUBLISHED)
        .first()
    )
    if article is None:
        raise NotFoundError("Article not found")
    return to_article_out(article, _category_names(db, [article]))


def list_by_author(db: Session, author_id: int) -> list[ArticleOut]:
    """Every article by this author regardless of status, newest first."""
    rows = _newest_first(db.query(Article).filter(Article.author_id == author_id)).all()
    return _enrich(db, rows)


def list_all(db: Session) -> list[ArticleOut]:
    """Every article regardless of status, newest first (admin view)."""
    return _enrich(db, _newest_first(db.query(Article)).all())


def parse_category_id(db: Session, raw: str | None) -> int | None:
    """
    Turn a form value into a category id. Empty means uncategorized; anything
    else must name an existing category.
    """
    if raw is None or not str(raw).strip():
        return None
    try:
        category_id = int(str(raw).strip())
    except ValueError as e:
        raise ValidationFailedError("category_id must be an integer") from e
    if get_category(db, category_id) is None:
        raise ValidationFailedError("Category not found")
    return category_id


def can_modify(actor: CurrentUser, article: Article) -> bool:
    return actor.role == ROLE_ADMIN or article.author_id == actor.id


def create_article(
    db: Session,
    author: CurrentUser,
    title: str | None,
    content: str | None,
    category_id: int | None = None,
    image_url: str | None = None,
) -> ArticleOut:
    """
    Insert a published article owned by author. title and content must be non-blank;
    author_name is captured from the author now and never refreshed.
    """
    if not title or not title.strip() or not content or not content.strip():
        raise ValidationFailedError("Title and content are required")
    now = datetime.now(UTC)
    article = Article(
        title=title.strip(),
        content=content,
        author_id=author.id,
        author_name=author.name,
        category_id=category_id,
        image_url=image_url,
        status=STATUS_PUBLISHED,
        created_at=now,
        updated_at=now,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    logger.info("Article created id=%s author_id=%s", article.id, author.id)
    return to_article_out(article, _category_names(db, [article]))


def get_editable(db: Session, article_id: int, actor: CurrentUser) -> Article:
    """
    Load an article the actor may change (its author or any admin).
    Raises NotFoundError when absent, PermissionDeniedError for anyone else.
    """
    if not is_row_id(article_id):
        raise NotFoundError("Article not found")
    article = db.query(Article).filter(Article.id == article_id).first()
    if article is None:
        raise NotFoundError("Article not found")
    if not can_modify(actor, article):
        raise PermissionDeniedError("Not authorized to modify this article")
    return article


def update_article(
    db: Session,
    article: Article,
    title: str | None = None,
    content: str | None = None,
    category_id: int | None | object = UNCHANGED,
    image_url: str | None = None,
) -> ArticleOut:
    """
    Apply a partial update. Blank title/content and a missing image keep the stored
    values; pass category_id=None to clear the category. updated_at always moves.
    """
    if title and title.strip():
        article.title = title.strip()
    if content and content.strip():
        article.content = content
    if category_id is not UNCHANGED:
        article.category_id = category_id
    if image_url:
        article.image_url = image_url
    article.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(article)
    logger.info("Article updated id=%s", article.id)
    return to_article_out(article, _category_names(db, [article]))


def delete_article(db: Session, article: Article) -> None:
    article_id = article.id
    db.delete(article)
    db.commit()
    logger.info("Article deleted id=%s", article_id)
