"""
Upload Storage (Uploads → Disk → Public URLs)
=============================================

Purpose
-------
Utilities for persisting uploaded files under ``settings.UPLOAD_DIR``, removing
them again, and building their public links.

Key Functions
-------------
- guess_ext      : Infer a safe, lowercase file extension from a filename.
- is_pdf         : Content-type check for PDF parts.
- is_image       : Content-type check for poster/photo parts.
- persist_upload : Validate type and size, save an UploadFile under a generated name.
- remove_upload  : Best-effort removal of a stored file; failures are logged, never raised.
- public_url     : ``{PUBLIC_BASE_URL}/uploads/{filename}``.

Stored names are ``{prefix}{uuid4 hex}{ext}``, so two uploads never collide.
"""

import logging
import os
import re
import uuid
from typing import Callable, Optional

from fastapi import UploadFile

from aila_admin.database.config.config import settings
from aila_admin.errors import PayloadTooLarge, ValidationFailed

logger = logging.getLogger(__name__)

UPLOADS_ROUTE = "/uploads"
CHUNK_SIZE = 1024 * 1024
PDF_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}

_SAFE_EXT = re.compile(r"^\.[a-z0-9]{1,10}$")


def guess_ext(filename: Optional[str]) -> str:
    """
    Extract the file extension from a filename.

    Returns
    -------
    str
        Lowercased extension (e.g. ".pdf"), or "" when missing or unusual.
    """
    _, ext = os.path.splitext(filename or "")
    ext = ext.lower()
    return ext if _SAFE_EXT.match(ext) else ""


def _content_type(f: UploadFile) -> str:
    return (f.content_type or "").split(";")[0].strip().lower()


def is_pdf(f: UploadFile) -> bool:
    return _content_type(f) in PDF_CONTENT_TYPES


def is_image(f: UploadFile) -> bool:
    return _content_type(f).startswith("image/")


def upload_path(filename: str) -> str:
    return os.path.join(settings.UPLOAD_DIR, os.path.basename(filename))


def persist_upload(
    f: UploadFile,
    accept: Callable[[UploadFile], bool],
    label: str,
    prefix: str = "",
    default_ext: str = "",
) -> str:
    """
    Save an uploaded file to the upload directory.

    - Rejects the part if `accept(f)` is False.
    - Generates a unique filename using UUID and preserves the original extension.
    - Streams the content to disk, aborting above ``settings.MAX_UPLOAD_BYTES``.

    Args:
        f (UploadFile): The file uploaded by the client.
        accept (callable): Content-type predicate, e.g. `is_pdf`.
        label (str): Field name used in error messages.
        prefix (str): Prefix of the stored name (e.g. "user_").
        default_ext (str): Extension used when the original name has none.

    Returns:
        str: The stored file name (relative to the upload directory).

    Raises:
        ValidationFailed: wrong content type.
        PayloadTooLarge: file exceeds the configured size limit.
    """
    if not accept(f):
        raise ValidationFailed(f"Unsupported file type for '{label}': {f.content_type or 'unknown'}")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    new_name = f"{prefix}{uuid.uuid4().hex}{guess_ext(f.filename) or default_ext}"
    dest = upload_path(new_name)
    written = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = f.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > settings.MAX_UPLOAD_BYTES:
                    raise PayloadTooLarge(
                        f"'{label}' exceeds the {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB upload limit"
                    )
                out.write(chunk)
    except Exception:
        remove_upload(dest)
        raise
    logger.info("Stored upload %s (%d bytes) as %s", label, written, new_name)
    return new_name


def remove_upload(filename: Optional[str]) -> bool:
    """
    Delete a stored file, ignoring missing files.

    Returns:
        bool: True if a file was removed.
    """
    if not filename:
        return False
    path = upload_path(filename)
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Failed to delete upload %s: %s", path, e)
        return False


def public_url(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{UPLOADS_ROUTE}/{filename}"
