"""Python client for the Essential Times API."""

from essential_times.client.api import ApiError, NewsApiClient, SessionExpiredError
from essential_times.client.session import SessionStore

__all__ = ["ApiError", "NewsApiClient", "SessionExpiredError", "SessionStore"]
