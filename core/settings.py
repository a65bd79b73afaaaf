from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_STORAGE_BACKENDS = {"local", "gcs"}
_TRUE_WORDS = {"1", "true", "yes"}
_FALSE_WORDS = {"0", "false", "no"}


def _split_csv(value: str | None) -> tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env(name: str) -> str | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    return normalized or None


def _env_flag(name: str, default: str = "false") -> bool:
    return (_env(name) or default).lower() in _TRUE_WORDS


def collect_missing_required_env_vars() -> list[str]:
    missing: list[str] = []

    storage_backend = (_env("STORAGE_BACKEND") or "local").lower()
    if storage_backend == "gcs" and _env("GCS_BUCKET") is None:
        missing.append("GCS_BUCKET")

    return sorted(set(missing))


def collect_invalid_env_values() -> list[str]:
    invalid_values: list[str] = []

    storage_backend = (_env("STORAGE_BACKEND") or "local").lower()
    if storage_backend not in SUPPORTED_STORAGE_BACKENDS:
        invalid_values.append("STORAGE_BACKEND must be one of: gcs, local")

    insecure = _env("GCS_INSECURE")
    if insecure is not None and insecure.lower() not in _TRUE_WORDS | _FALSE_WORDS:
        invalid_values.append("GCS_INSECURE must be a boolean (true/false)")

    log_level = _env("LOG_LEVEL")
    if log_level is not None and not isinstance(logging.getLevelName(log_level.upper()), int):
        invalid_values.append("LOG_LEVEL must be a standard logging level name")

    return invalid_values


def validate_required_environment() -> None:
    missing_vars = collect_missing_required_env_vars()
    invalid_values = collect_invalid_env_values()
    if not missing_vars and not invalid_values:
        return

    message_lines = ["Application startup blocked by invalid environment configuration."]
    if missing_vars:
        message_lines.append("")
        message_lines.append("Missing required environment variables:")
        message_lines.extend(f"- {name}" for name in missing_vars)
    if invalid_values:
        message_lines.append("")
        message_lines.append("Invalid environment values:")
        message_lines.extend(f"- {message}" for message in invalid_values)
    raise RuntimeError("\n".join(message_lines))


@dataclass(frozen=True)
class Settings:
    env: str
    cors_origins: tuple[str, ...]
    debug_include_error_details: bool
    log_level: str
    storage_backend: str
    storage_local_root: str
    local_files_base_url: str
    gcs_project_id: str | None
    gcs_key_filename: str | None
    gcs_bucket: str | None
    gcs_asset_domain: str | None
    gcs_insecure: bool
    gcs_max_age: str | None
    gcs_base_path: str | None
    gcs_upload_folder_path: str | None

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    validate_required_environment()

    return Settings(
        env=os.getenv("ENV", "development"),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS")),
        debug_include_error_details=_env_flag("DEBUG_INCLUDE_ERROR_DETAILS"),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        storage_backend=(_env("STORAGE_BACKEND") or "local").lower(),
        storage_local_root=os.getenv("STORAGE_LOCAL_ROOT", "uploads"),
        local_files_base_url=(_env("LOCAL_FILES_BASE_URL") or "/content").rstrip("/"),
        gcs_project_id=_env("GCS_PROJECT_ID"),
        gcs_key_filename=_env("GCS_KEY_FILENAME"),
        gcs_bucket=_env("GCS_BUCKET"),
        gcs_asset_domain=_env("GCS_ASSET_DOMAIN"),
        gcs_insecure=_env_flag("GCS_INSECURE"),
        gcs_max_age=_env("GCS_MAX_AGE"),
        gcs_base_path=_env("GCS_BASE_PATH"),
        gcs_upload_folder_path=_env("GCS_UPLOAD_FOLDER_PATH"),
    )
