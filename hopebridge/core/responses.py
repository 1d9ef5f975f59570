"""Envelope builders and error formatting."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from datetime import timezone
from typing import Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hopebridge.core.errors import AppError
from hopebridge.core.errors import ErrorCode
from hopebridge.core.errors import code_to_status
from hopebridge.core.validation import VALIDATION_FAILED_CAUSE
from hopebridge.core.validation import RequestValidationFailure
from hopebridge.core.validation import StructuredValidationError
from hopebridge.schemas.envelope import ErrorObject
from hopebridge.schemas.envelope import FailureEnvelope
from hopebridge.schemas.envelope import SuccessEnvelope

UNKNOWN_ERROR_CAUSE = "Unknown error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_success(message: str, details: Any = None) -> SuccessEnvelope:
    """Build the success envelope for a handler result."""
    return SuccessEnvelope(message=message, details=details, timestamp=_utcnow())


def build_failure(error: ErrorObject) -> FailureEnvelope:
    """Build the failure envelope for a formatted error."""
    return FailureEnvelope(message=error.cause, error=error, timestamp=_utcnow())


def success_response(
    message: str,
    details: Any = None,
    *,
    status_code: int = status.HTTP_200_OK,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Serialize a success envelope into a JSON response."""
    payload = build_success(message, details)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True),
        headers=dict(headers) if headers else None,
    )


def failure_response(error: ErrorObject, status_code: int) -> JSONResponse:
    """Serialize a failure envelope into a JSON response."""
    payload = build_failure(error)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _http_exception_code(status_code: int) -> tuple[ErrorCode, int]:
    if status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        return ErrorCode.UNAUTHORIZED, status_code
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND, status_code
    if status_code == status.HTTP_409_CONFLICT:
        return ErrorCode.DATA_ALREADY_EXIST, status_code
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ErrorCode.INTERNAL_SERVER_ERROR, code_to_status(ErrorCode.INTERNAL_SERVER_ERROR)
    return ErrorCode.MISSING_PARAMETER, code_to_status(ErrorCode.MISSING_PARAMETER)


class ErrorHandler:
    """Format one raised error and remember the status chosen for it.

    A new instance is created per failed request; ``status_code`` is read by
    the transport layer after :meth:`format_error` so body and status cannot
    disagree.
    """

    def __init__(self) -> None:
        self.status_code: int | None = None

    def format_error(self, raised: BaseException) -> ErrorObject:
        if isinstance(raised, AppError):
            self.status_code = raised.http_status
            return ErrorObject(
                code=raised.code,
                cause=raised.message,
                created_at=_utcnow(),
                details=raised.details,
            )

        if isinstance(raised, (RequestValidationFailure, RequestValidationError)):
            if isinstance(raised, RequestValidationFailure):
                structured = raised.error
            else:
                structured = StructuredValidationError.from_issues(raised.errors())
            self.status_code = code_to_status(ErrorCode.VALIDATION_ERROR)
            return ErrorObject(
                code=ErrorCode.VALIDATION_ERROR,
                cause=VALIDATION_FAILED_CAUSE,
                created_at=_utcnow(),
                details=structured.as_details(),
            )

        if isinstance(raised, StarletteHTTPException):
            code, resolved_status = _http_exception_code(raised.status_code)
            self.status_code = resolved_status
            cause = raised.detail if isinstance(raised.detail, str) and raised.detail else "Request failed"
            if code is ErrorCode.INTERNAL_SERVER_ERROR:
                cause = UNKNOWN_ERROR_CAUSE
            return ErrorObject(code=code, cause=cause, created_at=_utcnow())

        self.status_code = code_to_status(ErrorCode.INTERNAL_SERVER_ERROR)
        return ErrorObject(
            code=ErrorCode.INTERNAL_SERVER_ERROR,
            cause=UNKNOWN_ERROR_CAUSE,
            created_at=_utcnow(),
        )


def format_error(raised: BaseException) -> tuple[ErrorObject, int]:
    """Format an error with a throwaway handler and return it with its status."""
    handler = ErrorHandler()
    error = handler.format_error(raised)
    return error, handler.status_code
