"""Domain error taxonomy shared by every HopeBridge route."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any


class ErrorCode(str, Enum):
    UNAUTHORIZED = "ERR_UNAUTHORIZED"
    NOT_FOUND = "ERR_NOT_FOUND"
    DATA_ALREADY_EXIST = "ERR_DATA_ALREADY_EXIST"
    MISSING_PARAMETER = "ERR_MISSING_PARAMETER"
    VALIDATION_ERROR = "ERR_VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "ERR_INTERNAL_SERVER_ERROR"


ERROR_STATUS: Mapping[ErrorCode, int] = MappingProxyType(
    {
        ErrorCode.UNAUTHORIZED: 401,
        ErrorCode.NOT_FOUND: 404,
        ErrorCode.DATA_ALREADY_EXIST: 409,
        ErrorCode.MISSING_PARAMETER: 400,
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.INTERNAL_SERVER_ERROR: 500,
    }
)


def code_to_status(code: ErrorCode | str) -> int:
    """Return the HTTP status bound to an error code."""
    return ERROR_STATUS[ErrorCode(code)]


class AppError(Exception):
    """Application exception carrying a closed-set error code.

    Raised as close to the detection point as possible and converted to the
    failure envelope by the handler wrapper. Validation failures have their
    own type (``RequestValidationFailure``) and cannot be built here.
    """

    def __init__(
        self,
        code: ErrorCode | str,
        message: str,
        details: Mapping[str, Any] | None = None,
        http_status: int | None = None,
    ) -> None:
        resolved = ErrorCode(code)
        if resolved is ErrorCode.VALIDATION_ERROR:
            raise ValueError("ERR_VALIDATION_ERROR is reserved for the validation path")

        super().__init__(message)
        self.code = resolved
        self.message = message
        self.details = dict(details) if details else None
        self.http_status = http_status if http_status is not None else code_to_status(resolved)

    def __repr__(self) -> str:
        return f"AppError(code={self.code.value!r}, message={self.message!r}, http_status={self.http_status})"


class NotFoundError(AppError):
    """Convenience exception for missing entities."""

    def __init__(self, *, message: str = "Resource not found", details: Mapping[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, details)


class AlreadyExistsError(AppError):
    """Convenience exception for uniqueness conflicts."""

    def __init__(self, *, message: str, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.DATA_ALREADY_EXIST, message, details)


class MissingParameterError(AppError):
    """Convenience exception for absent or malformed input outside schema validation."""

    def __init__(self, *, message: str, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.MISSING_PARAMETER, message, details)
