"""Disk storage for article images served under /uploads."""

import logging
import os
import re
import time
import uuid

from essential_times.core.config import get_settings
from essential_times.services.errors import ImageRejectedError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")


class ImageStore:
    """Writes uploads under directory with collision-free generated names."""

    def __init__(self, directory: str, max_bytes: int, url_prefix: str = UPLOADS_URL_PREFIX) -> None:
        self.directory = directory
        self.max_bytes = max_bytes
        self.url_prefix = url_prefix.rstrip("/")

    def _filename_for(self, original: str | None) -> str:
        ext = os.path.splitext(original or "")[1].lower()
        if not _SAFE_EXTENSION.match(ext):
            ext = ""
        return f"{int(time.time() * 1000)}-{uuid.uuid4()}{ext}"

    def validate(self, data: bytes, content_type: str | None) -> None:
        if not content_type or not content_type.lower().startswith("image/"):
            raise ImageRejectedError("Only image files are allowed")
        if len(data) > self.max_bytes:
            if self.max_bytes >= 1024 * 1024:
                limit = f"{self.max_bytes // (1024 * 1024)} MB"
            else:
                limit = f"{self.max_bytes} bytes"
            raise ImageRejectedError(f"Image must not exceed {limit}", status_code=413)

    def save(self, data: bytes, filename: str | None, content_type: str | None) -> str:
        """Validate and store an image; return its public URL (/uploads/<name>)."""
        self.validate(data, content_type)
        os.makedirs(self.directory, exist_ok=True)
        name = self._filename_for(filename)
        with open(os.path.join(self.directory, name), "wb") as fh:
            fh.write(data)
        logger.info("Stored image %s (%d bytes)", name, len(data))
        return f"{self.url_prefix}/{name}"

    def path_for(self, image_url: str | None) -> str | None:
        """Map a stored URL back to a file inside directory, or None if it is not ours."""
        if not image_url or not image_url.startswith(self.url_prefix + "/"):
            return None
        name = os.path.basename(image_url[len(self.url_prefix) + 1:])
        if not name or name in (".", ".."):
            return None
        return os.path.join(self.directory, name)

    def discard(self, image_url: str | None) -> None:
        """Remove a previously stored image. Best effort: failures are logged only."""
        path = self.path_for(image_url)
        if path is None:
            return
        try:
            os.remove(path)
            logger.info("Removed image %s", os.path.basename(path))
        except FileNotFoundError:
            logger.debug("Image already gone: %s", path)
        except OSError as e:
            logger.warning("Could not remove image %s: %s", path, e)


def get_image_store() -> ImageStore:
    """Dependency: image store configured from settings."""
    settings = get_settings()
    return ImageStore(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
