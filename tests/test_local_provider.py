from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.errors import InvalidInputError
from core.storage.local_provider import LocalStorageProvider
from core.storage.types import FileDescriptor

NOW = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)
NOW_MS = 1709631000000


@pytest.fixture
def provider(tmp_path):
    return LocalStorageProvider(str(tmp_path / "store"), public_base_url="/content/", clock=lambda: NOW)


@pytest.fixture
def upload(tmp_path):
    path = tmp_path / "tmp-upload"
    path.write_bytes(b"song bytes")
    return path


@pytest.mark.asyncio
async def test_save_copies_file_under_category_and_date(provider, upload):
    url = await provider.save(FileDescriptor(name="song.mp3", path=str(upload), type="audio/mpeg"))

    key = f"media/2024/03/song-{NOW_MS}.mp3"
    assert url == f"/content/{key}"
    assert (provider.root / key).read_bytes() == b"song bytes"
    assert provider.url_to_path(url) == key


@pytest.mark.parametrize(
    "url",
    [
        "http://localhost:8000/content/images/2024/03/a-1.png",
        "https://cms.example.com/content/images/2024/03/a-1.png",
        "/content/images/2024/03/a-1.png",
    ],
)
def test_url_to_path_strips_served_prefix_from_absolute_urls(provider, url: str):
    assert provider.url_to_path(url) == "images/2024/03/a-1.png"


def test_url_to_path_with_absolute_base_url(tmp_path):
    provider = LocalStorageProvider(str(tmp_path / "store"), public_base_url="https://files.example.com/content")

    assert provider.url_to_path("https://files.example.com/content/images/2024/03/a-1.png") == "images/2024/03/a-1.png"


@pytest.mark.asyncio
async def test_save_applies_base_path(tmp_path, upload):
    provider = LocalStorageProvider(str(tmp_path / "store"), base_path="/blog/", clock=lambda: NOW)

    url = await provider.save(FileDescriptor(name="notes.txt", path=str(upload)))

    assert url == f"/content/blog/files/2024/03/notes-{NOW_MS}.txt"


@pytest.mark.asyncio
async def test_save_requires_a_local_path(provider):
    with pytest.raises(InvalidInputError):
        await provider.save(FileDescriptor(name="song.mp3"))


@pytest.mark.asyncio
async def test_exists_read_and_delete(provider, upload):
    url = await provider.save(FileDescriptor(name="song.mp3", path=str(upload)))
    key = provider.url_to_path(url)
    directory, filename = key.rsplit("/", 1)

    assert await provider.exists(filename, directory) is True
    assert await provider.read(key) == b"song bytes"

    await provider.delete(key)
    await provider.delete(key)

    assert await provider.exists(filename, directory) is False


@pytest.mark.asyncio
async def test_read_of_missing_file_raises(provider):
    with pytest.raises(FileNotFoundError):
        await provider.read("files/2024/03/missing.txt")


@pytest.mark.asyncio
async def test_keys_cannot_escape_the_storage_root(provider):
    assert await provider.exists("../../etc/passwd") is False
    with pytest.raises(InvalidInputError):
        await provider.read("../outside.txt")
