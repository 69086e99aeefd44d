"""Default accounts and categories inserted on first boot."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from essential_times.models.category import Category
from essential_times.models.user import ROLE_ADMIN, ROLE_REPORTER
from essential_times.services.users import create_user, get_user_by_email

if TYPE_CHECKING:
    from essential_times.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    ("정치", "politics", 1),
    ("경제", "economy", 2),
    ("사회", "society", 3),
    ("기술", "technology", 4),
    ("연예", "entertainment", 5),
    ("스포츠", "sports", 6),
)


def seed_users(db: Session, settings: "Settings") -> int:
    """Create the reporter and admin accounts unless their emails already exist."""
    accounts = (
        (settings.REPORTER_ACCOUNT_ID, settings.REPORTER_ACCOUNT_PASSWORD, ROLE_REPORTER, "기자"),
        (settings.ADMIN_ACCOUNT_ID, settings.ADMIN_ACCOUNT_PASSWORD, ROLE_ADMIN, "관리자"),
    )
    created = 0
    for email, password, role, name in accounts:
        if get_user_by_email(db, email) is not None:
            continue
        create_user(db, email, password.get_secret_value(), name, role=role)
        created += 1
    return created


def seed_categories(db: Session) -> int:
    """Insert the default category set only when no category exists yet."""
    if db.query(Category).count() > 0:
        return 0
    for name, slug, display_order in DEFAULT_CATEGORIES:
        db.add(Category(name=name, slug=slug, display_order=display_order))
    db.commit()
    return len(DEFAULT_CATEGORIES)


def seed_defaults(db: Session, settings: "Settings") -> tuple[int, int]:
    """Seed accounts and categories. Idempotent: safe to run on every start."""
    users_created = seed_users(db, settings)
    categories_created = seed_categories(db)
    if users_created or categories_created:
        logger.info(
            "Seeded defaults: users_created=%s, categories_created=%s",
            users_created,
            categories_created,
        )
    return (users_created, categories_created)
