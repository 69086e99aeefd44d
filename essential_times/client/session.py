"""Local session cache: the bearer token and user profile survive between CLI runs."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = os.path.join("~", ".essential_times", "session.json")


class SessionStore:
    """JSON file holding {"token": ..., "user": {...}}; missing or unreadable means logged out."""

    def __init__(self, path: str | None = None) -> None:
        self.path = os.path.expanduser(
            path or os.environ.get("ESSENTIAL_TIMES_SESSION_FILE") or DEFAULT_SESSION_FILE
        )
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def token(self) -> str | None:
        return self._data.get("token")

    @property
    def user(self) -> dict[str, Any] | None:
        return self._data.get("user")

    def save(self, token: str, user: dict[str, Any]) -> None:
        self._data = {"token": token, "user": user}
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, ensure_ascii=False)
        try:
            os.chmod(self.path, 0o600)
        except OSError as e:
            logger.debug("Could not restrict permissions on %s: %s", self.path, e)

    def clear(self) -> None:
        self._data = {}
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
