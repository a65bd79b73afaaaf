from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_NOT_CONFIGURED = "STORAGE_NOT_CONFIGURED"
    MEDIA_INPUT_INVALID = "MEDIA_INPUT_INVALID"


class AppException(HTTPException):
    def __init__(
        self,
        *,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        detail = {
            "message": message,
            "code": code.value,
            "details": details,
        }
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ConfigurationError(AppException):
    """The storage adapter was used before it was given a bucket."""

    def __init__(self, message: str = "Google Cloud Storage is not configured.", details: Any | None = None) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorCode.STORAGE_NOT_CONFIGURED,
            message=message,
            details=details,
        )


class InvalidInputError(AppException):
    """The file descriptor handed to the adapter cannot be stored."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=ErrorCode.MEDIA_INPUT_INVALID,
            message=message,
            details=details,
        )


def resource_not_found(resource: str, resource_id: str | None = None) -> AppException:
    details = {"resource": resource}
    if resource_id:
        details["resource_id"] = resource_id
    return AppException(
        status_code=status.HTTP_404_NOT_FOUND,
        code=ErrorCode.RESOURCE_NOT_FOUND,
        message=f"{resource} not found",
        details=details,
    )
