from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from core.settings import Settings

DEFAULT_MAX_AGE = 2678400  # 31 days


def parse_max_age(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return DEFAULT_MAX_AGE
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return DEFAULT_MAX_AGE


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


@dataclass(frozen=True)
class GCSConfig:
    bucket: str
    project_id: str | None = None
    key_filename: str | None = None
    asset_domain: str | None = None
    insecure: bool = False
    max_age: int = DEFAULT_MAX_AGE
    base_path: str | None = None
    upload_folder_path: str | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GCSConfig":
        """Build a config from the host's adapter options.

        Accepts the camelCase keys the host uses (``projectId``,
        ``key``/``keyFilename``, ``bucket``, ``assetDomain``, ``insecure``,
        ``maxAge``, ``basePath``, ``uploadFolderPath``).
        """
        return cls(
            bucket=str(options.get("bucket") or ""),
            project_id=_optional_str(options.get("projectId")),
            key_filename=_optional_str(options.get("keyFilename") or options.get("key")),
            asset_domain=_optional_str(options.get("assetDomain")),
            insecure=_parse_flag(options.get("insecure", False)),
            max_age=parse_max_age(options.get("maxAge")),
            base_path=_optional_str(options.get("basePath")),
            upload_folder_path=_optional_str(options.get("uploadFolderPath")),
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GCSConfig":
        return cls(
            bucket=settings.gcs_bucket or "",
            project_id=settings.gcs_project_id,
            key_filename=settings.gcs_key_filename,
            asset_domain=settings.gcs_asset_domain,
            insecure=settings.gcs_insecure,
            max_age=parse_max_age(settings.gcs_max_age),
            base_path=settings.gcs_base_path,
            upload_folder_path=settings.gcs_upload_folder_path,
        )

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.max_age}"
