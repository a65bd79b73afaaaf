from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.storage.types import MediaCategory


class StoredMediaOut(BaseModel):
    url: str
    key: str
    category: MediaCategory

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class MediaExistsOut(BaseModel):
    filename: str
    target_dir: str | None = None
    exists: bool


class UrlToPathRequest(BaseModel):
    url: str = Field(min_length=1)


class UrlToPathOut(BaseModel):
    url: str
    key: str


class MediaDeletedOut(BaseModel):
    key: str
    deleted: bool = True
