"""Unit tests for envelope building and error formatting."""

from __future__ import annotations

import json

from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hopebridge.core.errors import AppError
from hopebridge.core.errors import ErrorCode
from hopebridge.core.responses import UNKNOWN_ERROR_CAUSE
from hopebridge.core.responses import ErrorHandler
from hopebridge.core.responses import build_failure
from hopebridge.core.responses import build_success
from hopebridge.core.responses import failure_response
from hopebridge.core.responses import format_error
from hopebridge.core.responses import success_response
from hopebridge.core.validation import RequestValidationFailure
from hopebridge.core.validation import StructuredValidationError


class _Donation(BaseModel):
    amount: int = Field(gt=0)
    currency: str


def test_success_envelope_has_no_error_key() -> None:
    response = success_response("Created.", {"id": 1}, status_code=201, headers={"Cache-Control": "no-store"})

    body = json.loads(response.body)
    assert response.status_code == 201
    assert response.headers["cache-control"] == "no-store"
    assert body["success"] is True
    assert body["message"] == "Created."
    assert body["details"] == {"id": 1}
    assert "timestamp" in body
    assert "error" not in body


def test_build_success_keeps_details_untouched() -> None:
    envelope = build_success("ok", [1, 2, 3])

    assert envelope.success is True
    assert envelope.details == [1, 2, 3]
    assert envelope.timestamp.tzinfo is not None


def test_failure_envelope_has_no_details_key_and_camel_case_timestamp() -> None:
    error, status_code = format_error(AppError(ErrorCode.NOT_FOUND, "Post not found"))
    response = failure_response(error, status_code)

    body = json.loads(response.body)
    assert response.status_code == 404
    assert body["success"] is False
    assert body["message"] == "Post not found"
    assert "details" not in body
    assert body["error"]["code"] == "ERR_NOT_FOUND"
    assert body["error"]["cause"] == "Post not found"
    assert "createdAt" in body["error"]
    assert "details" not in body["error"]


def test_build_failure_mirrors_cause_into_message() -> None:
    error, _ = format_error(AppError(ErrorCode.MISSING_PARAMETER, "id is required"))

    envelope = build_failure(error)

    assert envelope.success is False
    assert envelope.message == "id is required"


def test_app_error_branch_records_status_on_the_handler() -> None:
    handler = ErrorHandler()

    error = handler.format_error(AppError(ErrorCode.DATA_ALREADY_EXIST, "duplicate", {"field": "email"}))

    assert handler.status_code == 409
    assert error.code is ErrorCode.DATA_ALREADY_EXIST
    assert error.details == {"field": "email"}


def test_app_error_branch_keeps_status_override() -> None:
    error, status_code = format_error(AppError(ErrorCode.UNAUTHORIZED, "Forbidden", http_status=403))

    assert error.code is ErrorCode.UNAUTHORIZED
    assert status_code == 403


def test_validation_failure_branch_uses_structured_details() -> None:
    failure = RequestValidationFailure(StructuredValidationError(fields={"category": "Field required"}))

    error, status_code = format_error(failure)

    assert status_code == 400
    assert error.code is ErrorCode.VALIDATION_ERROR
    assert error.cause == "Validation failed"
    assert error.details == {"category": "Field required"}


def test_bare_pydantic_errors_are_server_faults() -> None:
    try:
        _Donation.model_validate({"amount": 0})
    except ValidationError as exc:
        raised = exc

    error, status_code = format_error(raised)

    assert status_code == 500
    assert error.code is ErrorCode.INTERNAL_SERVER_ERROR
    assert error.cause == UNKNOWN_ERROR_CAUSE
    assert error.details is None
    assert "currency" not in error.model_dump_json()


def test_unknown_exceptions_become_internal_errors_without_leaking() -> None:
    error, status_code = format_error(ConnectionError("password=hunter2 host=db.internal"))

    assert status_code == 500
    assert error.code is ErrorCode.INTERNAL_SERVER_ERROR
    assert error.cause == UNKNOWN_ERROR_CAUSE
    assert error.details is None
    assert "hunter2" not in error.model_dump_json()


def test_framework_http_exceptions_map_onto_closed_codes() -> None:
    not_found, not_found_status = format_error(StarletteHTTPException(status_code=404, detail="Not Found"))
    not_allowed, not_allowed_status = format_error(StarletteHTTPException(status_code=405, detail="Method Not Allowed"))
    forbidden, forbidden_status = format_error(StarletteHTTPException(status_code=403))
    upstream, upstream_status = format_error(StarletteHTTPException(status_code=503, detail="db down"))

    assert (not_found.code, not_found_status) == (ErrorCode.NOT_FOUND, 404)
    assert (not_allowed.code, not_allowed_status) == (ErrorCode.MISSING_PARAMETER, 400)
    assert (forbidden.code, forbidden_status) == (ErrorCode.UNAUTHORIZED, 403)
    assert (upstream.code, upstream_status) == (ErrorCode.INTERNAL_SERVER_ERROR, 500)
    assert upstream.cause == UNKNOWN_ERROR_CAUSE
