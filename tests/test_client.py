"""Tests for the Python client: session cache, bearer handling, 401 logout, rendering and CLI."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime
from unittest.mock import patch

import httpx

from essential_times.client.api import ApiError, NewsApiClient, SessionExpiredError
from essential_times.client.cli import main as cli_main
from essential_times.client.render import (
    MESSAGES,
    format_date,
    render_article_detail,
    render_article_page,
    render_pagination,
    truncate,
)
from essential_times.client.session import SessionStore
from tests.helpers import PASSWORD, ApiTestCase


def _session_path() -> str:
    return os.path.join(tempfile.mkdtemp(prefix="essential-times-session-"), "session.json")


class TestSessionStore(unittest.TestCase):
    def test_save_reload_clear(self) -> None:
        path = _session_path()
        store = SessionStore(path)
        self.assertIsNone(store.token)
        store.save("tok", {"id": 1, "name": "기자"})
        reloaded = SessionStore(path)
        self.assertEqual(reloaded.token, "tok")
        self.assertEqual(reloaded.user["name"], "기자")
        reloaded.clear()
        self.assertFalse(os.path.exists(path))
        self.assertIsNone(SessionStore(path).token)

    def test_chmod_failure_is_logged_not_raised(self) -> None:
        path = _session_path()
        with patch("essential_times.client.session.os.chmod", side_effect=OSError("read-only fs")):
            with self.assertLogs("essential_times.client.session", level="DEBUG") as logs:
                SessionStore(path).save("tok", {"id": 1})
        self.assertIn("read-only fs", logs.output[0])
        self.assertEqual(SessionStore(path).token, "tok")

    def test_corrupt_file_means_logged_out(self) -> None:
        path = _session_path()
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        self.assertIsNone(SessionStore(path).token)


class TestBearerAndExpiry(unittest.TestCase):
    """Every request carries the cached token; any 401 clears the session."""

    def _client(self, handler) -> NewsApiClient:
        store = SessionStore(_session_path())
        store.save("cached-token", {"id": 1, "email": "a@b.c", "role": "reporter", "name": "기자"})
        http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
        return NewsApiClient(http, store)

    def test_token_attached(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["path"] = request.url.path
            return httpx.Response(200, json=[])

        self._client(handler).my_articles()
        self.assertEqual(seen, {"auth": "Bearer cached-token", "path": "/api/my-articles"})

    def test_401_clears_session(self) -> None:
        client = self._client(lambda request: httpx.Response(401, json={"error": "Invalid or expired token"}))
        with self.assertRaises(SessionExpiredError) as ctx:
            client.my_articles()
        self.assertEqual(ctx.exception.message, "Invalid or expired token")
        self.assertIsNone(client.session.token)
        self.assertIsNone(client.session.user)

    def test_other_errors_keep_session(self) -> None:
        client = self._client(lambda request: httpx.Response(403, json={"error": "Admin access required"}))
        with self.assertRaises(ApiError) as ctx:
            client.admin_articles()
        self.assertNotIsInstance(ctx.exception, SessionExpiredError)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(client.session.token, "cached-token")

    def test_update_sends_only_supplied_fields(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.content.decode()
            return httpx.Response(200, json={"message": "ok"})

        self._client(handler).update_article(5, title="새 제목", category_id="")
        self.assertIn("category_id=", seen["body"])
        self.assertIn("title=", seen["body"])
        self.assertNotIn("content=", seen["body"])


class TestRender(unittest.TestCase):
    def test_format_date(self) -> None:
        self.assertEqual(format_date("2024-03-05T14:07:00"), "2024년 3월 5일 오후 02:07")
        self.assertEqual(format_date(datetime(2024, 3, 5, 0, 5)), "2024년 3월 5일 오전 12:05")
        self.assertEqual(format_date(None), "")

    def test_truncate(self) -> None:
        self.assertEqual(truncate("짧음"), "짧음")
        self.assertEqual(truncate("가" * 200), "가" * 150 + "...")

    def test_detail_splits_paragraphs(self) -> None:
        text = render_article_detail(
            {
                "title": "제목",
                "content": "첫 문단\n둘째 문단",
                "author_name": "기자",
                "created_at": "2024-03-05T09:00:00",
                "category_name": None,
                "image_url": None,
            }
        )
        self.assertIn("기자: 기자", text)
        self.assertIn("첫 문단\n\n둘째 문단", text)

    def test_pager(self) -> None:
        self.assertEqual(
            render_pagination({"current": 2, "total": 3, "hasNext": True, "hasPrev": True}),
            "< 이전  2 / 3  다음 >",
        )

    def test_empty_page(self) -> None:
        text = render_article_page({"articles": [], "pagination": {}})
        self.assertIn("등록된 기사가 없습니다.", text)


class TestClientAgainstApi(ApiTestCase):
    """Drive the real application through NewsApiClient using the TestClient transport."""

    def setUp(self) -> None:
        super().setUp()
        self.reporter = self.make_user()
        self.category = self.make_category("정치", "politics", 1)
        self.api = NewsApiClient(self.client, SessionStore(_session_path()))

    def test_login_create_and_read_back(self) -> None:
        profile = self.api.login("reporter@example.com", PASSWORD)
        self.assertEqual(profile["role"], "reporter")
        created = self.api.create_article("클라이언트 기사", "본문\n둘째 줄", self.category.id)
        self.assertEqual(created["author_id"], self.reporter.id)

        page = self.api.category_articles("politics")
        self.assertEqual([a["id"] for a in page["articles"]], [created["id"]])
        self.assertEqual(self.api.get_article(created["id"])["title"], "클라이언트 기사")
        self.assertEqual(len(self.api.my_articles()), 1)

        self.api.update_article(created["id"], category_id="")
        self.assertIsNone(self.api.get_article(created["id"])["category_id"])
        self.api.delete_article(created["id"])
        with self.assertRaises(ApiError) as ctx:
            self.api.get_article(created["id"])
        self.assertEqual(ctx.exception.status_code, 404)

    def test_bad_login_reports_server_message(self) -> None:
        with self.assertRaises(SessionExpiredError) as ctx:
            self.api.login("reporter@example.com", "wrong-password")
        self.assertEqual(ctx.exception.message, "Invalid credentials")
        self.assertIsNone(self.api.session.token)

    def test_cli_lists_articles(self) -> None:
        self.make_article(self.reporter, title="CLI 기사", category_id=self.category.id)
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli_main(["articles", "--category", "politics"], client=self.api)
        self.assertEqual(code, 0)
        self.assertIn("CLI 기사", out.getvalue())
        self.assertIn("정치", out.getvalue())

    def test_cli_create_requires_title_and_content(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = cli_main(["create", "--title", "제목만"], client=self.api)
        self.assertEqual(code, 2)
        self.assertIn(MESSAGES["title_content_required"], err.getvalue())

    def test_cli_expired_session_message(self) -> None:
        self.api.session.save("stale-token", {"id": 1, "email": "x", "role": "reporter", "name": "x"})
        err = io.StringIO()
        with redirect_stderr(err):
            code = cli_main(["mine"], client=self.api)
        self.assertEqual(code, 1)
        self.assertIn(MESSAGES["session_expired"], err.getvalue())
        self.assertIsNone(self.api.session.token)

    def test_cli_login_saves_session(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli_main(["login", "reporter@example.com", "--password", PASSWORD], client=self.api)
        self.assertEqual(code, 0)
        with open(self.api.session.path, encoding="utf-8") as fh:
            self.assertEqual(json.load(fh)["user"]["email"], "reporter@example.com")


if __name__ == "__main__":
    unittest.main()
