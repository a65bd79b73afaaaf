from __future__ import annotations

import posixpath
import re
from datetime import datetime

from core.storage.classifier import file_name_for
from core.storage.types import DEFAULT_FILE_NAME, FileDescriptor, MediaCategory

_REPEATED_SLASHES = re.compile(r"/{2,}")
_PATH_SEPARATORS = re.compile(r"[\\/]")


def date_folder(now: datetime) -> str:
    return f"{now.year:04d}/{now.month:02d}"


def split_file_name(name: str) -> tuple[str, str]:
    """Split ``name`` into a sanitised base name and its original extension.

    The extension keeps its case and is empty when the name has none. Path
    separators left in the base name are replaced with ``_``.
    """
    last_segment = posixpath.basename(name.replace("\\", "/"))
    _, ext = posixpath.splitext(last_segment)
    base = name[: len(name) - len(ext)] if ext else name
    base = _PATH_SEPARATORS.sub("_", base)
    return base or DEFAULT_FILE_NAME, ext


def epoch_millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def target_directory(base_path: str, category: MediaCategory | str, now: datetime) -> str:
    category_value = category.value if isinstance(category, MediaCategory) else category
    segments = [base_path, category_value, date_folder(now)]
    return "/".join(segment for segment in segments if segment).replace("\\", "/")


def build_object_key(
    file: FileDescriptor,
    category: MediaCategory | str,
    base_path: str,
    *,
    now: datetime | None = None,
) -> str:
    """Object key ``[base_path/]<category>/<YYYY>/<MM>/<base>-<millis><ext>``."""
    now = now or datetime.now()
    base, ext = split_file_name(file_name_for(file))
    unique_name = f"{base}-{epoch_millis(now)}{ext}"
    key = f"{target_directory(base_path, category, now)}/{unique_name}"
    return _REPEATED_SLASHES.sub("/", key).lstrip("/")
