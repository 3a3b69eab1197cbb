"""Utility functions for the contact form file upload.

This module gates the optional file field before the submission reaches
the contact service: only a short list of document and image types is
accepted, up to a fixed size.
"""

import logging
from typing import Optional
from fastapi import UploadFile, status
from app.core.config import settings
from app.models.contact import ContactAttachment

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
    "text/plain",
})


class AttachmentRejectedError(Exception):
    """Raised when an uploaded file is refused by the upload layer."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def read_upload(
    upload: Optional[UploadFile],
    max_bytes: Optional[int] = None,
) -> Optional[ContactAttachment]:
    """Read an uploaded file into memory as a contact attachment.

    Args:
        upload: The file field of the multipart form, if any
        max_bytes: Size limit, defaults to MAX_ATTACHMENT_BYTES

    Returns:
        The attachment, or None when no file was sent

    Raises:
        AttachmentRejectedError: If the content type is not allowed or the file is too large
    """
    if upload is None or not upload.filename:
        return None

    limit = settings.MAX_ATTACHMENT_BYTES if max_bytes is None else max_bytes
    content_type = upload.content_type or "application/octet-stream"

    if content_type.split(";")[0].strip().lower() not in ALLOWED_CONTENT_TYPES:
        logger.info(f"Rejected upload {upload.filename} with content type {content_type}")
        raise AttachmentRejectedError("File type not allowed")

    # one byte past the limit is enough to tell the file is oversize
    content = await upload.read(limit + 1)
    if len(content) > limit:
        logger.info(f"Rejected upload {upload.filename}, larger than {limit} bytes")
        raise AttachmentRejectedError(
            "File too large", status.HTTP_413_CONTENT_TOO_LARGE
        )

    return ContactAttachment(
        content=content,
        filename=upload.filename,
        content_type=content_type,
        size=len(content),
    )
