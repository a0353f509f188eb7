"""Image upload handling for the content directory.

Uploaded photos go through three steps before an entry can reference them:

1. :func:`validate_upload` checks the file extension and the declared content
   type against the configured allow-lists.
2. :func:`read_upload` reads the request body, refusing anything larger than
   ``max_upload_bytes``.  Nothing touches the disk for rejected files.
3. :func:`save_upload` writes the bytes under a freshly generated name and
   returns that name, which is what the record store keeps as ``image_path``.

:func:`remove_upload` is the best-effort counterpart used when an entry is
deleted or its photo replaced.
"""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile

from countrydex.core.config import CountrydexConfig
from countrydex.core.errors import PayloadTooLargeError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_upload(filename: str, content_type: str | None, cfg: CountrydexConfig) -> None:
    """Reject files that are not one of the allowed image types.

    Both the extension of the original filename and the content type declared
    by the client must be on the allow-list.

    Args:
        filename: Original filename supplied by the client.
        content_type: MIME type declared in the multipart part, if any.
        cfg: Active configuration.

    Raises:
        UnsupportedFileTypeError: If either check fails.
    """
    extension_ok = _extension(filename) in cfg.allowed_extensions
    mimetype_ok = (content_type or "").lower() in cfg.allowed_content_types

    if not (extension_ok and mimetype_ok):
        logger.warning(f"Rejected upload {filename!r} with content type {content_type!r}")
        allowed = ", ".join(ext.lstrip(".") for ext in cfg.allowed_extensions)
        raise UnsupportedFileTypeError(f"Only image files are allowed ({allowed})")


async def read_upload(upload: UploadFile, cfg: CountrydexConfig) -> bytes:
    """Read an uploaded file into memory, enforcing the size limit.

    At most ``max_upload_bytes + 1`` bytes are read, which is enough to tell
    whether the limit was exceeded without buffering an arbitrarily large body.

    Args:
        upload: The multipart file part.
        cfg: Active configuration.

    Returns:
        The file contents.

    Raises:
        PayloadTooLargeError: If the file is larger than the limit.
    """
    data = await upload.read(cfg.max_upload_bytes + 1)
    if len(data) > cfg.max_upload_bytes:
        logger.warning(f"Rejected upload {upload.filename!r}: larger than {cfg.max_upload_bytes} bytes")
        limit_mb = cfg.max_upload_bytes / (1024 * 1024)
        raise PayloadTooLargeError(f"Image exceeds the {limit_mb:g} MB upload limit")
    return data


def generate_filename(original: str) -> str:
    """Build a unique filename that keeps the original extension.

    The name combines the current time in milliseconds with a random number,
    e.g. ``1718000000000-482913377.jpg``.

    Args:
        original: Filename supplied by the client.

    Returns:
        The generated filename (no directory part).
    """
    millis = time.time_ns() // 1_000_000
    suffix = random.randint(0, 999_999_999)
    return f"{millis}-{suffix}{_extension(original)}"


def save_upload(data: bytes, original: str, uploads_dir: Path) -> str:
    """Write an accepted image into the content directory.

    Args:
        data: File contents, already validated.
        original: Filename supplied by the client.
        uploads_dir: The content directory.

    Returns:
        The generated filename, relative to ``uploads_dir``.
    """
    uploads_dir.mkdir(parents=True, exist_ok=True)

    filename = generate_filename(original)
    while (uploads_dir / filename).exists():
        filename = generate_filename(original)

    (uploads_dir / filename).write_bytes(data)
    logger.info(f"Saved upload {original!r} as {filename} ({len(data)} bytes)")
    return filename


def remove_upload(filename: str, uploads_dir: Path) -> bool:
    """Delete a stored image, ignoring failures.

    A file that is already gone is not an error.  Any other filesystem error
    is logged and swallowed so the caller's row mutation can still complete.

    Args:
        filename: Stored ``image_path`` value.
        uploads_dir: The content directory.

    Returns:
        True if a file was removed, False otherwise.
    """
    base = uploads_dir.resolve()
    filepath = (uploads_dir / filename).resolve()

    if filepath.parent != base:
        logger.warning(f"Refusing to remove {filename!r}: outside of {base}")
        return False

    try:
        filepath.unlink()
    except FileNotFoundError:
        logger.debug(f"Upload already missing: {filename}")
        return False
    except OSError as e:
        logger.warning(f"Could not remove upload {filename}: {e}")
        return False

    logger.info(f"Removed upload {filename}")
    return True
