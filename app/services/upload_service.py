"""
Upload service.

Stores uploaded files under ``UPLOAD_DIR`` with a random name and returns
the public URL they are served from (``/uploads/<name>``).
"""

import logging
import os
import re
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile, status

from app.core.config import settings
from app.schemas.schedule import UploadResponse

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"^[0-9a-f]{32}(\.[A-Za-z0-9]{1,10})?$")


def read_limited(file: UploadFile, limit: Optional[int] = None) -> bytes:
    """Read an uploaded file, raising 413 if it exceeds ``limit`` bytes."""
    limit = limit or settings.MAX_UPLOAD_BYTES
    content = file.file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File too large")
    return content


class UploadService:

    def __init__(self, upload_dir: Optional[str] = None):
        self.upload_dir = upload_dir or settings.UPLOAD_DIR

    def save(self, file: UploadFile) -> UploadResponse:
        content = read_limited(file)
        if not content:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")

        original = file.filename or "upload"
        extension = os.path.splitext(original)[1].lower()
        if not re.fullmatch(r"\.[a-z0-9]{1,10}", extension):
            extension = ""
        filename = f"{uuid.uuid4().hex}{extension}"

        os.makedirs(self.upload_dir, exist_ok=True)
        with open(os.path.join(self.upload_dir, filename), "wb") as out:
            out.write(content)
        logger.info("Stored upload %s (%s bytes)", filename, len(content))

        return UploadResponse(
            file_url=f"{settings.API_BASE_URL.rstrip('/')}/uploads/{filename}",
            filename=filename,
            original_name=original,
            content_type=file.content_type or "application/octet-stream",
            size=len(content),
        )

    def delete(self, filename: str) -> None:
        if not _SAFE_NAME.match(filename):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filename")
        path = os.path.join(self.upload_dir, filename)
        if not os.path.isfile(path):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
        os.remove(path)
