"""Core app configuration and database."""

from essential_times.core.config import get_settings, settings
from essential_times.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
