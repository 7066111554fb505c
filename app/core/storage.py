# app/core/storage.py

import os
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from loguru import logger
from supabase import Client, create_client

from app.core.config import settings
from app.core.constants import ALLOWED_CONTENT_TYPES
from app.core.errors import StorageUnavailable, ValidationError
from app.models.enums import MediaType

_client: Optional[Client] = None


def get_storage_client() -> Optional[Client]:
    """Created on first use; None when Supabase is not configured."""
    global _client

    if _client is None and settings.SUPABASE_URL and settings.SUPABASE_KEY:
        try:
            _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        except Exception as e:
            logger.error(f"Supabase init failed: {e}")
            return None

    return _client


@dataclass(frozen=True)
class StoredFile:
    path: str
    public_url: str
    content_type: str
    size: int


def _max_bytes() -> int:
    return settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024


def _extension(filename: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    # Anything odd in the client's filename is dropped, only a short extension survives
    return ext if ext[1:].isalnum() and len(ext) <= 6 else ""


def build_storage_path(department_id: str, media_type: MediaType, filename: Optional[str]) -> str:
    return f"departments/{department_id}/{media_type.value}s/{uuid.uuid4()}{_extension(filename)}"


async def read_validated_upload(file: UploadFile, media_type: MediaType) -> bytes:
    """
    Checks content type against the media type and the size cap.
    Returns the file bytes.
    """
    allowed = ALLOWED_CONTENT_TYPES[media_type]
    if file.content_type not in allowed:
        raise ValidationError.for_field(
            "file", f"Content type {file.content_type} not allowed for {media_type.value}"
        )

    content = await file.read()
    await file.seek(0)

    if not content:
        raise ValidationError.for_field("file", "File is empty")

    if len(content) > _max_bytes():
        raise ValidationError.for_field(
            "file", f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB"
        )

    return content


async def upload_media_file(
    file: UploadFile,
    department_id: str,
    media_type: MediaType,
) -> StoredFile:
    content = await read_validated_upload(file, media_type)

    client = get_storage_client()
    if client is None:
        logger.error("Upload attempted but Supabase credentials are missing")
        raise StorageUnavailable("storage not configured")

    path = build_storage_path(department_id, media_type, file.filename)
    bucket = client.storage.from_(settings.STORAGE_BUCKET)

    try:
        bucket.upload(
            path=path,
            file=content,
            file_options={"content-type": file.content_type, "upsert": "false"},
        )
        public_url = bucket.get_public_url(path)
    except Exception as e:
        logger.error(f"Storage upload failed for {path}: {e}")
        raise StorageUnavailable("upload failed") from e

    logger.info(f"Uploaded {media_type.value} to {path} ({len(content)} bytes)")
    return StoredFile(path=path, public_url=public_url, content_type=file.content_type, size=len(content))


def remove_media_file(path: Optional[str]) -> None:
    """
    Deletes a stored file after its row is gone. Failures leave an orphan
    object behind and are only logged.
    """
    if not path:
        return

    client = get_storage_client()
    if client is None:
        logger.warning(f"Cannot remove {path}: storage not configured")
        return

    try:
        client.storage.from_(settings.STORAGE_BUCKET).remove([path])
    except Exception as e:
        logger.warning(f"Failed to remove stored file {path}: {e}")
