from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_FILE_NAME = "file"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class StorageBackend(str, Enum):
    LOCAL = "local"
    GCS = "gcs"


class MediaCategory(str, Enum):
    IMAGES = "images"
    MEDIA = "media"
    FILES = "files"


@dataclass(frozen=True)
class FileDescriptor:
    """An uploaded file as handed over by the host.

    ``path`` is where the bytes currently live on local disk, ``name`` the
    original client-side file name and ``type`` the declared MIME type.
    """

    name: str | None = None
    path: str | None = None
    type: str | None = None


@dataclass(frozen=True)
class ResolvedDomain:
    asset_domain: str
    base_path: str


@dataclass(frozen=True)
class ParsedAssetDomain:
    scheme: str
    host: str
    segments: tuple[str, ...]


@dataclass(frozen=True)
class LiteralAssetDomain:
    value: str


AssetDomainParseResult = ParsedAssetDomain | LiteralAssetDomain


@dataclass(frozen=True)
class StoredMedia:
    url: str
    key: str
    category: MediaCategory
