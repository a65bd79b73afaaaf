from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable

from google.api_core.exceptions import NotFound

from core.errors import ConfigurationError, InvalidInputError
from core.storage.classifier import classify, resolve_content_type
from core.storage.config import GCSConfig
from core.storage.domain import resolve_asset_domain
from core.storage.keys import build_object_key
from core.storage.provider import MediaStorageProvider, ServeHandler, join_key, passthrough_handler
from core.storage.types import FileDescriptor, ResolvedDomain, StorageBackend
from core.storage.urls import decode_object_key, encode_public_url

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 256 * 1024
PUBLIC_READ_ACL = "publicRead"


def build_client(config: GCSConfig) -> Any:
    try:
        from google.cloud import storage
    except ModuleNotFoundError as err:
        raise RuntimeError("google-cloud-storage is required for the GCS storage provider") from err

    if config.key_filename:
        return storage.Client.from_service_account_json(config.key_filename, project=config.project_id)
    return storage.Client(project=config.project_id)


class GCSStorageProvider(MediaStorageProvider):
    """Stores media in a Google Cloud Storage bucket under public URLs.

    Keys look like ``[base_path/]<category>/<YYYY>/<MM>/<name>-<millis><ext>``
    and are served from the resolved asset domain, so ``serve()`` is a no-op.
    A provider built without a config raises ``ConfigurationError`` from
    every storage operation.
    """

    backend_name = StorageBackend.GCS.value

    def __init__(
        self,
        config: GCSConfig | None,
        *,
        client: Any | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._clock = clock
        self._config = config if config is not None and config.bucket else None
        self._domain: ResolvedDomain | None = None
        self._bucket: Any | None = None

        if self._config is None:
            return

        self._domain = resolve_asset_domain(self._config)
        self._client = client if client is not None else build_client(self._config)
        self._bucket = self._client.bucket(self._config.bucket)

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    @property
    def bucket_name(self) -> str:
        return self._require_config().bucket

    @property
    def asset_domain(self) -> str:
        return self._require_domain().asset_domain

    @property
    def base_path(self) -> str:
        return self._require_domain().base_path

    @property
    def max_age(self) -> int:
        return self._require_config().max_age

    def _require_config(self) -> GCSConfig:
        if self._config is None:
            raise ConfigurationError()
        return self._config

    def _require_domain(self) -> ResolvedDomain:
        if self._domain is None:
            raise ConfigurationError()
        return self._domain

    def _blob(self, key: str) -> Any:
        self._require_config()
        return self._bucket.blob(key)

    async def save(self, file: FileDescriptor) -> str:
        config = self._require_config()
        if file is None or not file.path:
            raise InvalidInputError("File has no local path to upload from", details={"name": getattr(file, "name", None)})

        category = classify(file)
        key = build_object_key(file, category, self.base_path, now=self._clock())
        content_type = resolve_content_type(file)

        blob = self._blob(key)
        blob.cache_control = config.cache_control
        await asyncio.to_thread(
            blob.upload_from_filename,
            file.path,
            content_type=content_type,
            predefined_acl=PUBLIC_READ_ACL,
        )
        url = encode_public_url(self.asset_domain, key)
        logger.info("Uploaded %s to gs://%s/%s (%s)", file.path, config.bucket, key, content_type)
        return url

    async def exists(self, filename: str, target_dir: str | None = None) -> bool:
        key = join_key(target_dir, filename)
        blob = self._blob(key)
        try:
            return bool(await asyncio.to_thread(blob.exists))
        except Exception as exc:
            logger.warning("Existence check for %s failed, reporting missing: %s", key, exc)
            return False

    def _read_blob(self, blob: Any) -> bytes:
        chunks: list[bytes] = []
        with blob.open("rb", chunk_size=READ_CHUNK_SIZE) as reader:
            while True:
                chunk = reader.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    async def read(self, filename: str) -> bytes:
        blob = self._blob(filename)
        return await asyncio.to_thread(self._read_blob, blob)

    async def delete(self, filename: str) -> None:
        blob = self._blob(filename)
        try:
            await asyncio.to_thread(blob.delete)
        except NotFound:
            logger.info("Delete of missing object %s ignored", filename)
            return
        logger.info("Deleted gs://%s/%s", self.bucket_name, filename)

    def serve(self) -> ServeHandler:
        return passthrough_handler()

    def url_to_path(self, url: str) -> str:
        if self._domain is None or self._config is None:
            return decode_object_key(url, "", "")
        return decode_object_key(url, self._domain.asset_domain, self._config.bucket)
