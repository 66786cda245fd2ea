"""
Space Facts API - Planet Photo Storage
=======================================

What:  Validates, stores, resolves and removes uploaded planet photos.
How:   Checks the declared content type and size, generates a unique
       filename, and writes the bytes with aiofiles into a flat upload
       directory.
Who:   Used by the photo routes; one instance is created at startup and kept
       on app.state.photo_storage.

Checks, in order:
    1. Content type: only image/png and image/jpeg (the multipart part's
       declared type)
    2. Size: at most MAX_PHOTO_SIZE bytes (default 6MB)
    3. Filename: <uuid4>-<epoch millis>.<ext>, no user input involved

Directory layout:
    uploads/
    ├── 3f0c9a7e-...-1718031000123.png
    └── 9b1d2c44-...-1718031000456.jpeg
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import Request

from spacefacts.exceptions import BadRequestError, FileStorageError

logger = logging.getLogger(__name__)

# ── Allowed Photo Types ───────────────────────────────────────────────────
# MIME type → extension used in the generated filename
ALLOWED_PHOTO_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpeg",
}


class PhotoStorage:
    """
    Manages the lifecycle of uploaded planet photos.

    Lifecycle of a photo:
        1. Route receives the multipart "photo" part
        2. store_photo(): type check, size check, write to disk
        3. Route records the filename on the planet
        4. If the planet does not exist: cleanup_photo() removes the file
        5. GET /planets/photos/{filename}: resolve_photo() finds it again
    """

    def __init__(self, upload_dir: str, max_size: int):
        self.upload_dir = Path(upload_dir).resolve()
        self.max_size = max_size
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("PhotoStorage initialized with upload_dir=%s", self.upload_dir)

    def validate_content_type(self, content_type: Optional[str]) -> str:
        """
        Returns: the file extension for the accepted type.
        Raises:  BadRequestError for anything that is not PNG or JPEG.
        """
        mime = (content_type or "").split(";")[0].strip().lower()
        if mime not in ALLOWED_PHOTO_TYPES:
            raise BadRequestError(
                message="The uploaded file must be a JPG or a PNG image.",
                context={"content_type": content_type},
            )
        return ALLOWED_PHOTO_TYPES[mime]

    def validate_size(self, size: int) -> None:
        if size > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise BadRequestError(
                message=f"The uploaded file is too large. Maximum size is {max_mb:.0f}MB.",
                context={"size": size, "max_size": self.max_size},
            )

    @staticmethod
    def generate_filename(extension: str) -> str:
        """<uuid4>-<epoch milliseconds>.<extension>"""
        return f"{uuid.uuid4()}-{int(time.time() * 1000)}.{extension}"

    async def store_photo(self, content: bytes, content_type: Optional[str]) -> str:
        """
        Validate and write a photo.

        Returns:
            The generated filename (relative to the upload directory).

        Raises:
            BadRequestError: wrong type or too large
            FileStorageError: the file could not be written
        """
        extension = self.validate_content_type(content_type)
        self.validate_size(len(content))

        filename = self.generate_filename(extension)
        path = self.upload_dir / filename

        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store photo at %s: %s", path, str(e))
            raise FileStorageError(context={"path": str(path), "os_error": str(e)})

        logger.info("Photo stored: %s (%d bytes)", filename, len(content))
        return filename

    async def cleanup_photo(self, filename: str) -> None:
        """
        Best-effort removal of a stored photo.

        Missing files are ignored; other OS errors are logged, not raised,
        so the caller's own error response is what the client sees.
        """
        path = self.upload_dir / filename
        try:
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up photo: %s", filename)
            else:
                logger.debug("Cleanup: photo already gone: %s", filename)
        except OSError as e:
            logger.warning("Failed to clean up photo %s: %s", filename, str(e))

    def resolve_photo(self, filename: str) -> Optional[Path]:
        """
        Map a filename from the URL to a file inside the upload directory.

        Returns None when the file does not exist or the name points outside
        the upload directory (e.g. "../secrets"), and for names the OS cannot
        represent (embedded NUL bytes).
        """
        if not filename or "\x00" in filename or os.sep in filename:
            return None
        try:
            path = (self.upload_dir / filename).resolve()
        except (OSError, ValueError):
            return None
        if path.parent != self.upload_dir or not path.is_file():
            return None
        return path


def get_photo_storage(request: Request) -> PhotoStorage:
    """FastAPI dependency: the PhotoStorage created during startup."""
    storage = getattr(request.app.state, "photo_storage", None)
    if storage is None:
        raise RuntimeError("Photo storage not initialized; was the application lifespan run?")
    return storage
