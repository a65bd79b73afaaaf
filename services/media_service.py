from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path

from fastapi import UploadFile
from google.api_core.exceptions import NotFound

from core.errors import InvalidInputError, resource_not_found
from core.storage import FileDescriptor, MediaStorageManager, StoredMedia
from core.storage.classifier import classify

logger = logging.getLogger(__name__)


def _spool_to_disk(upload: UploadFile) -> str:
    suffix = Path(upload.filename or "").suffix
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        upload.file.seek(0)
        shutil.copyfileobj(upload.file, handle)
        return handle.name


async def save_upload(upload: UploadFile) -> StoredMedia:
    if not upload.filename:
        raise InvalidInputError("Filename is required")

    local_path = await asyncio.to_thread(_spool_to_disk, upload)
    try:
        descriptor = FileDescriptor(name=upload.filename, path=local_path, type=upload.content_type)
        provider = MediaStorageManager.get_instance().provider
        url = await provider.save(descriptor)
        return StoredMedia(url=url, key=provider.url_to_path(url), category=classify(descriptor))
    finally:
        try:
            os.unlink(local_path)
        except FileNotFoundError:
            pass


async def media_exists(filename: str, target_dir: str | None = None) -> bool:
    provider = MediaStorageManager.get_instance().provider
    return await provider.exists(filename, target_dir)


async def read_media(key: str) -> bytes:
    provider = MediaStorageManager.get_instance().provider
    try:
        return await provider.read(key)
    except (NotFound, FileNotFoundError):
        raise resource_not_found("Media", key)


async def remove_media(key: str) -> bool:
    provider = MediaStorageManager.get_instance().provider
    await provider.delete(key)
    return True


def resolve_key(url: str) -> str:
    return MediaStorageManager.get_instance().provider.url_to_path(url)
