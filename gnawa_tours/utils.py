"""Utility helpers for media storage."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional
from uuid import uuid4

from PIL import Image, UnidentifiedImageError

from .config import settings
from .constants import ALLOWED_UPLOAD_PREFIXES, BLOCKED_UPLOAD_TYPES
from .exceptions import UploadRejectedError

logger = logging.getLogger(__name__)


def media_folder(content_type: str) -> str:
    return "audio" if content_type.startswith("audio/") else "images"


def validate_upload_type(content_type: Optional[str]) -> str:
    """Check the MIME type against the upload allow-list; return it normalized."""

    normalized = (content_type or "").lower()
    if not normalized or not normalized.startswith(ALLOWED_UPLOAD_PREFIXES):
        raise UploadRejectedError("Unsupported file type (image or audio only)")
    if normalized.split(";", 1)[0].strip() in BLOCKED_UPLOAD_TYPES:
        raise UploadRejectedError("SVG images are not accepted")
    return normalized


def check_upload_size(size: int) -> None:
    if size > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise UploadRejectedError(f"File exceeds the maximum allowed size ({limit_mb} MB)")


def validate_upload(content_type: Optional[str], size: int) -> str:
    """Check MIME type and size ceiling; return the normalized content type."""

    normalized = validate_upload_type(content_type)
    check_upload_size(size)
    if size == 0:
        raise UploadRejectedError("Uploaded file is empty")
    return normalized


def _image_dimensions(data: bytes) -> tuple[int, int]:
    try:
        with Image.open(BytesIO(data)) as image:
            image.verify()
            width, height = image.size
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise UploadRejectedError("Uploaded file is not a valid image") from exc
    return width, height


def store_media_upload(data: bytes, filename: str, content_type: str) -> dict[str, object]:
    """Persist an uploaded file under the media root and describe it."""

    width = height = None
    if content_type.startswith("image/"):
        width, height = _image_dimensions(data)

    folder = media_folder(content_type)
    suffix = Path(filename).suffix.lower() or ".bin"
    stored_name = f"{uuid4().hex}{suffix}"
    directory = settings.media_root / folder
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / stored_name
    with path.open("wb") as handle:
        handle.write(data)

    logger.info("Stored %s upload %s (%d bytes)", folder, stored_name, len(data))
    return {
        "storage_path": f"{folder}/{stored_name}",
        "file_url": f"{settings.media_url_prefix}/{folder}/{stored_name}",
        "file_size": len(data),
        "width": width,
        "height": height,
    }


def remove_media_file(storage_path: Optional[str]) -> None:
    """Delete a stored media file when its record is removed."""

    if not storage_path:
        return
    (settings.media_root / storage_path).unlink(missing_ok=True)
    logger.info("Removed media file %s", storage_path)
