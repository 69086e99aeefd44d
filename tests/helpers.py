"""Shared fixtures for API tests: fresh schema per test, users, categories and tokens."""

import unittest

from fastapi.testclient import TestClient

from essential_times.core.database import SessionLocal, engine
from essential_times.core.security import create_access_token
from essential_times.main import app
from essential_times.models import Base, Category, User
from essential_times.schemas.auth import CurrentUser
from essential_times.services import articles as article_service
from essential_times.services.users import create_user

PASSWORD = "password123"


class ApiTestCase(unittest.TestCase):
    """Each test gets empty tables, a DB session and a TestClient (no startup seeding)."""

    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        self.db = SessionLocal()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        self.db.close()

    def make_user(
        self,
        email: str = "reporter@example.com",
        role: str = "reporter",
        name: str = "기자",
        password: str = PASSWORD,
    ) -> User:
        return create_user(self.db, email, password, name, role=role)

    def auth(self, user: User) -> dict[str, str]:
        token = create_access_token(user.id, user.email, user.role, user.name)
        return {"Authorization": f"Bearer {token}"}

    def make_category(self, name: str, slug: str, display_order: int = 0) -> Category:
        category = Category(name=name, slug=slug, display_order=display_order)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def make_article(self, author: User, title: str = "제목", content: str = "본문", **kwargs):
        return article_service.create_article(
            self.db, CurrentUser.model_validate(author), title, content, **kwargs
        )
