"""Image storage for story photos.

Images live on local disk under the uploads directory and are referenced by
public URL (``<public_base_url>/uploads/<name>``).
"""

import asyncio
import logging
import time
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from .errors import StoryValidationError

logger = logging.getLogger(__name__)


class ImageNotFoundError(FileNotFoundError):
    """No stored image for the given reference."""


class LocalImageStore:
    """Filesystem-backed image store."""

    def __init__(self, upload_dir: str | Path, public_base_url: str):
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")

    def _path_for(self, image_ref: str) -> Path:
        # Only references under our own uploads URL map to local files
        if not image_ref.startswith(self.url_for("")):
            raise ImageNotFoundError(f"'{image_ref}' is not a stored upload")
        try:
            filename = PurePosixPath(urlparse(image_ref).path).name
        except ValueError as e:
            raise ImageNotFoundError(f"Malformed image reference '{image_ref}'") from e
        if not filename:
            raise ImageNotFoundError(f"No image file in reference '{image_ref}'")
        return self.upload_dir / filename

    def url_for(self, filename: str) -> str:
        return f"{self.public_base_url}/uploads/{filename}"

    async def upload(self, filename: str, content: bytes, content_type: str) -> str:
        """Store an image and return its reference.

        Args:
            filename: Client-side file name (only its extension is kept)
            content: Raw image bytes
            content_type: MIME type; must be ``image/*``

        Returns:
            Public URL of the stored image

        Raises:
            StoryValidationError: If the content is not an image
        """
        if not content_type.startswith("image/"):
            raise StoryValidationError("Only images are allowed")

        name = f"{time.time_ns() // 1_000_000}{Path(filename).suffix}"
        path = self.upload_dir / name

        def _write() -> None:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        await asyncio.to_thread(_write)
        logger.info(f"Stored image {name} ({len(content)} bytes)")
        return self.url_for(name)

    async def delete(self, image_ref: str) -> None:
        """Delete a stored image.

        Raises:
            ImageNotFoundError: If the reference is not one of our upload URLs,
                or nothing is stored under it
            OSError: If the file cannot be removed
        """
        path = self._path_for(image_ref)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as e:
            raise ImageNotFoundError(f"Image '{path.name}' not found") from e
        logger.info(f"Deleted image {path.name}")


__all__ = [
    "ImageNotFoundError",
    "LocalImageStore",
]
