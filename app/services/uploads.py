"""Image attachments for tweets: validate, write to UPLOAD_DIR, return public URLs."""

import logging
import secrets
import time
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import UploadFile

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})


class UploadRejected(Exception):
    """Raised when an attachment fails validation. Carries the HTTP status to use."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _extension(file: UploadFile) -> str:
    suffix = Path(file.filename or "").suffix.lower()
    return suffix if suffix in ALLOWED_IMAGE_EXTENSIONS else ""


async def save_images(files: list[UploadFile], settings: "Settings") -> list[str]:
    """
    Validate and persist uploaded images; return their URLs in upload order.

    Every file is read and checked before anything is written, so a rejected
    batch leaves no files behind.
    """
    if len(files) > settings.UPLOAD_MAX_FILES:
        raise UploadRejected(f"At most {settings.UPLOAD_MAX_FILES} images are allowed")

    payloads: list[tuple[str, bytes]] = []
    for file in files:
        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise UploadRejected("Only image files are allowed")
        data = await file.read()
        if len(data) > settings.UPLOAD_MAX_BYTES:
            raise UploadRejected(
                f"Image too large. Max size: {settings.UPLOAD_MAX_BYTES} bytes",
                status_code=413,
            )
        name = f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{_extension(file)}"
        payloads.append((name, data))

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    urls: list[str] = []
    for name, data in payloads:
        (upload_dir / name).write_bytes(data)
        urls.append(f"{settings.UPLOAD_URL_PREFIX}/{name}")
        logger.info("Saved upload %s (%s bytes)", name, len(data))
    return urls
