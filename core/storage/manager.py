from __future__ import annotations

from threading import Lock

from core.settings import get_settings
from core.storage.config import GCSConfig
from core.storage.gcs_provider import GCSStorageProvider
from core.storage.local_provider import LocalStorageProvider
from core.storage.provider import MediaStorageProvider
from core.storage.types import StorageBackend


class MediaStorageManager:
    _instance: "MediaStorageManager | None" = None
    _lock = Lock()

    def __init__(self, provider: MediaStorageProvider) -> None:
        self._provider = provider

    @classmethod
    def configure(cls, provider: MediaStorageProvider) -> "MediaStorageManager":
        with cls._lock:
            cls._instance = cls(provider)
            return cls._instance

    @classmethod
    def configure_from_settings(cls) -> "MediaStorageManager":
        settings = get_settings()
        if settings.storage_backend == StorageBackend.GCS.value:
            if not settings.gcs_bucket:
                raise RuntimeError("GCS_BUCKET is required when STORAGE_BACKEND=gcs")
            provider: MediaStorageProvider = GCSStorageProvider(GCSConfig.from_settings(settings))
        else:
            provider = LocalStorageProvider(
                root_dir=settings.storage_local_root,
                public_base_url=settings.local_files_base_url,
                base_path=settings.gcs_upload_folder_path or settings.gcs_base_path or "",
            )

        return cls.configure(provider)

    @classmethod
    def get_instance(cls) -> "MediaStorageManager":
        if cls._instance is None:
            return cls.configure_from_settings()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None

    @property
    def provider(self) -> MediaStorageProvider:
        return self._provider
