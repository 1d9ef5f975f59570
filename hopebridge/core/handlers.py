"""Handler wrapper and app-level exception handler registration."""

from __future__ import annotations

from collections.abc import AsyncIterator
from collections.abc import Callable
import functools
import inspect
import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.responses import StreamingResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hopebridge.core.errors import AppError
from hopebridge.core.responses import ErrorHandler
from hopebridge.core.responses import build_failure
from hopebridge.core.responses import failure_response
from hopebridge.core.validation import RequestValidationFailure
from hopebridge.schemas.envelope import ErrorObject

logger = logging.getLogger(__name__)

_WRAPPED_MARKER = "__hopebridge_error_handler__"


def _log_failure(where: str, raised: BaseException, error: ErrorObject, status_code: int) -> None:
    if status_code >= 500:
        logger.error(
            "Unhandled error in %s: code=%s status=%s",
            where,
            error.code.value,
            status_code,
            exc_info=(type(raised), raised, raised.__traceback__),
        )
    else:
        logger.warning("Request failed in %s: code=%s status=%s cause=%s", where, error.code.value, status_code, error.cause)


def _respond_with_failure(where: str, raised: BaseException) -> JSONResponse:
    handler = ErrorHandler()
    error = handler.format_error(raised)
    _log_failure(where, raised, error, handler.status_code)
    return failure_response(error, handler.status_code)


async def _guard_stream(where: str, iterator: AsyncIterator[Any]) -> AsyncIterator[Any]:
    # headers are already on the wire; the failure envelope becomes the last chunk
    try:
        async for chunk in iterator:
            yield chunk
    except Exception as exc:
        handler = ErrorHandler()
        error = handler.format_error(exc)
        _log_failure(where, exc, error, handler.status_code)
        yield build_failure(error).model_dump_json(by_alias=True, exclude_none=True)


def _finalize(where: str, result: Any) -> Any:
    if isinstance(result, StreamingResponse):
        result.body_iterator = _guard_stream(where, result.body_iterator)
    return result


def with_error_handler(handler: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a route handler so any failure becomes a failure envelope.

    Successful results are returned untouched. Sync and async handlers are
    both supported, and a handler that is already wrapped is returned as is.
    """
    if getattr(handler, _WRAPPED_MARKER, False):
        return handler

    where = getattr(handler, "__qualname__", repr(handler))

    if inspect.iscoroutinefunction(handler):

        @functools.wraps(handler)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                result = await handler(*args, **kwargs)
            except Exception as exc:
                return _respond_with_failure(where, exc)
            return _finalize(where, result)

        wrapper: Callable[..., Any] = async_wrapper
    else:

        @functools.wraps(handler)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                result = handler(*args, **kwargs)
            except Exception as exc:
                return _respond_with_failure(where, exc)
            return _finalize(where, result)

        wrapper = sync_wrapper

    # FastAPI resolves string annotations against the wrapper's globals otherwise.
    wrapper.__signature__ = inspect.signature(handler, eval_str=True)
    setattr(wrapper, _WRAPPED_MARKER, True)
    return wrapper


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Envelope failures raised outside a wrapped handler body (dependencies, routing)."""
    return _respond_with_failure(f"{request.method} {request.url.path}", exc)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the HopeBridge error handlers to a FastAPI app instance."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationFailure, app_error_handler)
    app.add_exception_handler(RequestValidationError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, app_error_handler)
    app.add_exception_handler(Exception, app_error_handler)
