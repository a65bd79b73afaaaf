from __future__ import annotations

import mimetypes
import posixpath

from core.storage.types import DEFAULT_CONTENT_TYPE, DEFAULT_FILE_NAME, FileDescriptor, MediaCategory

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "ico"})
MEDIA_EXTENSIONS = frozenset(
    {"mp4", "avi", "mov", "wmv", "flv", "webm", "mkv", "mp3", "wav", "flac", "aac", "ogg", "m4a"}
)


def file_name_for(file: FileDescriptor) -> str:
    """Original file name: explicit name, else the base name of the path."""
    if file.name:
        return file.name
    if file.path:
        base = posixpath.basename(file.path.replace("\\", "/"))
        if base:
            return base
    return DEFAULT_FILE_NAME


def extension_of(name: str) -> str:
    """Lowercase extension without the leading dot ("" when there is none)."""
    last_segment = posixpath.basename(name.replace("\\", "/"))
    _, ext = posixpath.splitext(last_segment)
    return ext[1:].lower()


def _guess_type(name: str | None) -> str | None:
    if not name:
        return None
    guessed, _ = mimetypes.guess_type(name, strict=False)
    return guessed


def lookup_mime_type(file: FileDescriptor) -> str | None:
    """MIME type by extension of the file name, then of the path, then the declared type."""
    return _guess_type(file_name_for(file)) or _guess_type(file.path) or file.type or None


def resolve_content_type(file: FileDescriptor) -> str:
    """Content type sent with the upload, looked up from the stored path first."""
    return _guess_type(file.path) or _guess_type(file.name) or file.type or DEFAULT_CONTENT_TYPE


def classify(file: FileDescriptor) -> MediaCategory:
    ext = extension_of(file_name_for(file))
    mime_type = (lookup_mime_type(file) or "").lower()

    if ext in IMAGE_EXTENSIONS or mime_type.startswith("image/"):
        return MediaCategory.IMAGES
    if ext in MEDIA_EXTENSIONS or mime_type.startswith(("video/", "audio/")):
        return MediaCategory.MEDIA
    return MediaCategory.FILES
