from __future__ import annotations

import asyncio
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable
from urllib.parse import urlsplit

from core.errors import InvalidInputError
from core.storage.classifier import classify
from core.storage.keys import build_object_key
from core.storage.provider import MediaStorageProvider, ServeHandler, join_key, passthrough_handler
from core.storage.types import FileDescriptor, StorageBackend
from core.storage.urls import decode_object_key, encode_public_url

logger = logging.getLogger(__name__)


class LocalStorageProvider(MediaStorageProvider):
    """Development backend: same key layout, files kept under ``root_dir``."""

    backend_name = StorageBackend.LOCAL.value

    def __init__(
        self,
        root_dir: str,
        public_base_url: str = "/content",
        base_path: str = "",
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._clock = clock
        self._root = Path(root_dir).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")
        self._base_path = base_path.strip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        resolved = (self._root / key.lstrip("/")).resolve()
        if resolved != self._root and self._root not in resolved.parents:
            raise InvalidInputError("Invalid storage key", details={"key": key})
        return resolved

    async def save(self, file: FileDescriptor) -> str:
        if file is None or not file.path:
            raise InvalidInputError("File has no local path to upload from", details={"name": getattr(file, "name", None)})

        key = build_object_key(file, classify(file), self._base_path, now=self._clock())
        target = self._path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(shutil.copyfile, file.path, target)
        logger.info("Stored %s at %s", file.path, target)
        return encode_public_url(self._public_base_url, key)

    async def exists(self, filename: str, target_dir: str | None = None) -> bool:
        try:
            return self._path(join_key(target_dir, filename)).is_file()
        except (OSError, InvalidInputError):
            return False

    async def read(self, filename: str) -> bytes:
        return await asyncio.to_thread(self._path(filename).read_bytes)

    async def delete(self, filename: str) -> None:
        file_path = self._path(filename)
        if file_path.exists():
            file_path.unlink()
            logger.info("Deleted %s", file_path)

    def serve(self) -> ServeHandler:
        return passthrough_handler()

    def url_to_path(self, url: str) -> str:
        # A relative base URL is served by this app, so absolute URLs share its path prefix.
        if isinstance(url, str) and self._public_base_url.startswith("/"):
            try:
                parts = urlsplit(url)
            except ValueError:
                parts = None
            if parts is not None and parts.netloc:
                url = parts.path
        return decode_object_key(url, self._public_base_url, "")
