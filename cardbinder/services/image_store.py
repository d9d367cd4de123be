"""
Card image storage.

Writes uploaded photos below a root directory, one folder per owner, and
returns the public URL the files are served under.
"""

import logging
import re
import secrets
import time
from pathlib import Path

from cardbinder.config import settings
from cardbinder.models.failure import ImageUploadError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"

# Owner ids become directory names
_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.@-]*$")
_SAFE_EXTENSION = re.compile(r"^[A-Za-z0-9]{1,10}$")


class ImageStore:
    """Filesystem-backed store for card photos."""

    def __init__(self, root: Path, base_url: str, max_bytes: int):
        self.root = root
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    def check(self, user_id: str, filename: str | None, data: bytes) -> None:
        """
        Validate one image without storing it.

        Raises:
            ImageUploadError: If the owner id is unsafe, the file is empty,
                or it exceeds the size limit
        """
        if not _SAFE_SEGMENT.match(user_id) or ".." in user_id:
            raise ImageUploadError("Invalid owner for image upload.", detail=f"user_id={user_id!r}")
        if not data:
            raise ImageUploadError("Uploaded image is empty.", detail=f"filename={filename!r}")
        if len(data) > self.max_bytes:
            raise ImageUploadError(
                "Uploaded image is too large.",
                detail=f"{filename!r} exceeds limit of {self.max_bytes} bytes",
            )

    def save(self, user_id: str, filename: str | None, data: bytes) -> str:
        """
        Store one image for an owner.

        Files are named "<millis>_<random>.<ext>" so repeated uploads of the
        same filename never collide.

        Returns:
            Public URL of the stored image.

        Raises:
            ImageUploadError: If the image fails check()
        """
        self.check(user_id, filename, data)

        stored_name = f"{int(time.time() * 1000)}_{secrets.token_hex(8)}.{_extension(filename)}"
        owner_dir = self.root / user_id
        owner_dir.mkdir(parents=True, exist_ok=True)
        (owner_dir / stored_name).write_bytes(data)

        logger.info("Stored image %s/%s (%d bytes)", user_id, stored_name, len(data))
        return f"{self.base_url}/{user_id}/{stored_name}"

    def save_all(self, user_id: str, images: list[tuple[str | None, bytes]]) -> list[str]:
        """
        Store a batch of (filename, data) images, all or nothing.

        Every image is checked before any is written. If a write fails, the
        files already written for this batch are removed.
        """
        for filename, data in images:
            self.check(user_id, filename, data)

        urls: list[str] = []
        try:
            for filename, data in images:
                urls.append(self.save(user_id, filename, data))
        except OSError:
            for url in urls:
                self.delete(user_id, url)
            raise
        return urls

    def delete(self, user_id: str, url: str) -> None:
        """Remove a stored image by the URL save() returned for it."""
        stored_name = url.rsplit("/", 1)[-1]
        (self.root / user_id / stored_name).unlink(missing_ok=True)


def _extension(filename: str | None) -> str:
    """Lower-cased extension of an uploaded filename, or the default."""
    if not filename:
        return DEFAULT_EXTENSION
    suffix = Path(filename).suffix.lstrip(".").lower()
    if not _SAFE_EXTENSION.match(suffix):
        return DEFAULT_EXTENSION
    return suffix


def get_image_store() -> ImageStore:
    """Dependency that provides the configured image store."""
    return ImageStore(
        root=Path(settings.image_dir),
        base_url=settings.image_base_url,
        max_bytes=settings.max_image_bytes,
    )
