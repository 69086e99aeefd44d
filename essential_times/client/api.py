"""HTTP client for the Essential Times REST API (same surface as the browser client)."""

import logging
import mimetypes
import os
from typing import Any

import httpx

from essential_times.client.session import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5001"
DEFAULT_TIMEOUT_SEC = 30.0


class ApiError(Exception):
    """Raised when the API answers with an error status; message is the server's 'error' text."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SessionExpiredError(ApiError):
    """Raised on any 401: the cached session has been cleared and the user must log in again."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return ""


class NewsApiClient:
    """
    Thin wrapper over httpx that re-attaches the cached bearer token to every
    request and turns a 401 into a cleared session plus SessionExpiredError.
    """

    def __init__(
        self,
        http: httpx.Client,
        session: SessionStore,
        api_prefix: str = "/api",
    ) -> None:
        self.http = http
        self.session = session
        self.api_prefix = api_prefix.rstrip("/")

    @classmethod
    def connect(
        cls,
        base_url: str | None = None,
        session: SessionStore | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> "NewsApiClient":
        url = base_url or os.environ.get("ESSENTIAL_TIMES_API_URL") or DEFAULT_API_URL
        return cls(httpx.Client(base_url=url, timeout=timeout), session or SessionStore())

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        response = self.http.request(method, self.api_prefix + path, headers=headers, **kwargs)
        if response.status_code == 401:
            self.session.clear()
            raise SessionExpiredError(_error_message(response), status_code=401)
        if response.status_code >= 400:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response.json()

    # auth

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and cache the token and profile; returns the profile."""
        data = self._request("POST", "/login", json={"email": email, "password": password})
        self.session.save(data["token"], data["user"])
        return data["user"]

    def register(self, email: str, password: str, name: str) -> dict[str, Any]:
        return self._request(
            "POST", "/register", json={"email": email, "password": password, "name": name}
        )

    def logout(self) -> None:
        self.session.clear()

    # articles

    def list_articles(self, page: int = 1, limit: int = 10) -> dict[str, Any]:
        return self._request("GET", "/articles", params={"page": page, "limit": limit})

    def get_article(self, article_id: int) -> dict[str, Any]:
        return self._request("GET", f"/articles/{article_id}")

    def _multipart(
        self,
        fields: dict[str, str],
        image_path: str | None,
    ) -> dict[str, Any]:
        if not image_path:
            return {"data": fields}
        content_type = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
        with open(image_path, "rb") as fh:
            payload = fh.read()
        return {
            "data": fields,
            "files": {"image": (os.path.basename(image_path), payload, content_type)},
        }

    def create_article(
        self,
        title: str,
        content: str,
        category_id: int | None = None,
        image_path: str | None = None,
    ) -> dict[str, Any]:
        fields = {"title": title, "content": content}
        if category_id:
            fields["category_id"] = str(category_id)
        return self._request("POST", "/articles", **self._multipart(fields, image_path))

    def update_article(
        self,
        article_id: int,
        title: str | None = None,
        content: str | None = None,
        category_id: int | str | None = None,
        image_path: str | None = None,
    ) -> dict[str, Any]:
        """Send only the supplied fields; category_id='' clears the category."""
        fields: dict[str, str] = {}
        if title:
            fields["title"] = title
        if content:
            fields["content"] = content
        if category_id is not None:
            fields["category_id"] = str(category_id)
        return self._request("PUT", f"/articles/{article_id}", **self._multipart(fields, image_path))

    def delete_article(self, article_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/articles/{article_id}")

    def my_articles(self) -> list[dict[str, Any]]:
        return self._request("GET", "/my-articles")

    def admin_articles(self) -> list[dict[str, Any]]:
        return self._request("GET", "/admin/articles")

    # categories

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/categories")

    def category_articles(self, slug: str, page: int = 1, limit: int = 10) -> dict[str, Any]:
        return self._request(
            "GET", f"/categories/{slug}/articles", params={"page": page, "limit": limit}
        )

    def admin_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/admin/categories")

    def create_category(self, name: str, slug: str, display_order: int = 0) -> dict[str, Any]:
        return self._request(
            "POST",
            "/admin/categories",
            json={"name": name, "slug": slug, "display_order": display_order},
        )

    def update_category(
        self, category_id: int, name: str, slug: str, display_order: int = 0
    ) -> dict[str, Any]:
        return self._request(
            "PUT",
            f"/admin/categories/{category_id}",
            json={"name": name, "slug": slug, "display_order": display_order},
        )

    def delete_category(self, category_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/admin/categories/{category_id}")
