"""Review image uploads stored on local disk."""

from __future__ import annotations

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from localguide.core.errors import PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
PUBLIC_PREFIX = "/uploads/"
CHUNK_SIZE = 64 * 1024


def _unique_name(extension: str) -> str:
    """``<epoch ms>-<random 9 digits><ext>``."""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


def save_review_image(upload: UploadFile, upload_dir: Path, max_bytes: int) -> str:
    """Validate and store one image; return its public path (``/uploads/<name>``)."""
    extension = Path(upload.filename or "").suffix.lower()
    content_type = (upload.content_type or "").lower()
    if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("only image files (jpeg, png, gif) can be uploaded")

    upload_dir.mkdir(parents=True, exist_ok=True)
    name = _unique_name(extension)
    target = upload_dir / name

    written = 0
    try:
        with target.open("wb") as fp:
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    break
                fp.write(chunk)
    except OSError as exc:
        target.unlink(missing_ok=True)
        logger.error("failed to store upload %s: %s", name, exc)
        raise PersistenceFailure("failed to store image") from exc

    if written > max_bytes:
        target.unlink(missing_ok=True)
        raise ValidationError(f"image exceeds {max_bytes // (1024 * 1024)}MB")

    logger.info("stored upload %s (%d bytes)", name, written)
    return PUBLIC_PREFIX + name


def remove_upload(image_path: str, upload_dir: Path) -> bool:
    """Delete a stored image; failures are logged, never raised."""
    name = Path(image_path).name
    if not image_path.startswith(PUBLIC_PREFIX) or not name:
        logger.warning("refusing to remove unexpected image path %r", image_path)
        return False
    try:
        (upload_dir / name).unlink()
    except OSError as exc:
        logger.warning("failed to remove image %s: %s", image_path, exc)
        return False
    return True
