from __future__ import annotations

import pytest

from core import settings as settings_module
from core.storage import gcs_provider as gcs_provider_module
from core.storage.gcs_provider import GCSStorageProvider
from core.storage.local_provider import LocalStorageProvider
from core.storage.manager import MediaStorageManager


class _FakeClient:
    def __init__(self) -> None:
        self.bucket_names: list[str] = []

    def bucket(self, name: str):
        self.bucket_names.append(name)
        return object()


@pytest.fixture(autouse=True)
def _reset(monkeypatch: pytest.MonkeyPatch):
    for name in ("STORAGE_BACKEND", "GCS_BUCKET", "GCS_ASSET_DOMAIN", "GCS_BASE_PATH", "GCS_UPLOAD_FOLDER_PATH"):
        monkeypatch.delenv(name, raising=False)
    settings_module.get_settings.cache_clear()
    MediaStorageManager.reset()
    yield
    settings_module.get_settings.cache_clear()
    MediaStorageManager.reset()


def test_local_backend_is_the_default(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.setenv("STORAGE_LOCAL_ROOT", str(tmp_path / "uploads"))

    manager = MediaStorageManager.get_instance()

    assert isinstance(manager.provider, LocalStorageProvider)
    assert manager.provider.backend_name == "local"
    assert MediaStorageManager.get_instance() is manager


def test_gcs_backend_builds_provider_from_settings(monkeypatch: pytest.MonkeyPatch):
    client = _FakeClient()
    monkeypatch.setattr(gcs_provider_module, "build_client", lambda config: client)
    monkeypatch.setenv("STORAGE_BACKEND", "gcs")
    monkeypatch.setenv("GCS_BUCKET", "demo")
    monkeypatch.setenv("GCS_ASSET_DOMAIN", "https://cdn.example.com/demo/uploads")

    provider = MediaStorageManager.configure_from_settings().provider

    assert isinstance(provider, GCSStorageProvider)
    assert provider.asset_domain == "https://cdn.example.com/demo"
    assert provider.base_path == "uploads"
    assert client.bucket_names == ["demo"]


def test_gcs_backend_without_bucket_blocks_startup(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STORAGE_BACKEND", "gcs")

    with pytest.raises(RuntimeError):
        MediaStorageManager.configure_from_settings()


def test_configure_replaces_provider(tmp_path):
    first = LocalStorageProvider(str(tmp_path / "a"))
    second = LocalStorageProvider(str(tmp_path / "b"))

    MediaStorageManager.configure(first)
    manager = MediaStorageManager.configure(second)

    assert manager.provider is second
    assert MediaStorageManager.get_instance().provider is second
