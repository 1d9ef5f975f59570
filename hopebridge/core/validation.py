"""Request validation adapter.

Route handlers validate raw input through :func:`validate`, which hides the
schema engine behind :class:`SchemaValidator` and returns a
:class:`ValidationResult` instead of raising. Handlers that want a failed
validation to abort the request call :meth:`ValidationResult.unwrap` or use
the :func:`validated_body` dependency.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
import json
from types import MappingProxyType
from typing import Any
from typing import Generic
from typing import Protocol
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError

from hopebridge.core.errors import MissingParameterError

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_ENGINE = "pydantic"
VALIDATION_FAILED_CAUSE = "Validation failed"

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})
_CUSTOM_ERROR_TYPES = frozenset({"value_error", "assertion_error"})


def format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    """Render an error location as a dotted field path."""
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in _LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _issue_message(issue: Mapping[str, Any]) -> str:
    if issue.get("type") in _CUSTOM_ERROR_TYPES:
        ctx = issue.get("ctx") or {}
        if ctx.get("error") is not None:
            return str(ctx["error"])
    return str(issue.get("msg", "Invalid value"))


@dataclass(frozen=True)
class StructuredValidationError:
    """Flattened field path to message mapping for one failed validation."""

    fields: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_issues(cls, issues: Iterable[Mapping[str, Any]]) -> StructuredValidationError:
        fields: dict[str, str] = {}
        for issue in issues:
            path = format_location(issue.get("loc", ()))
            # first message per path wins
            fields.setdefault(path, _issue_message(issue))
        return cls(fields=fields)

    def as_details(self) -> dict[str, str]:
        return dict(self.fields)


class RequestValidationFailure(Exception):
    """Raised when a caller chooses to abort on a failed validation."""

    def __init__(self, error: StructuredValidationError) -> None:
        super().__init__(VALIDATION_FAILED_CAUSE)
        self.error = error


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Either a parsed value or a structured error, never both."""

    value: ModelT | None
    error: StructuredValidationError | None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("ValidationResult requires exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ModelT:
        """Return the parsed value or raise :class:`RequestValidationFailure`."""
        if self.error is not None:
            raise RequestValidationFailure(self.error)
        return self.value


class SchemaValidator(Protocol):
    """Capability boundary around a schema-validation engine."""

    def validate(self, schema: type[ModelT], raw: Any) -> ValidationResult[ModelT]: ...


class PydanticSchemaValidator:
    """Validate and coerce input with pydantic models."""

    def validate(self, schema: type[ModelT], raw: Any) -> ValidationResult[ModelT]:
        try:
            value = schema.model_validate(raw)
        except ValidationError as exc:
            return ValidationResult(value=None, error=StructuredValidationError.from_issues(exc.errors()))
        return ValidationResult(value=value, error=None)


_VALIDATORS: Mapping[str, Callable[[], SchemaValidator]] = MappingProxyType(
    {"pydantic": PydanticSchemaValidator},
)


def get_validator(engine: str = DEFAULT_ENGINE) -> SchemaValidator:
    """Return the validator registered for an engine name."""
    try:
        factory = _VALIDATORS[engine]
    except KeyError:
        raise ValueError(f"Unsupported validator engine: {engine}") from None
    return factory()


def validate(schema: type[ModelT], raw: Any, *, engine: str = DEFAULT_ENGINE) -> ValidationResult[ModelT]:
    """Run raw input against a schema without raising on invalid input."""
    return get_validator(engine).validate(schema, {} if raw is None else raw)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read a JSON object body, treating an empty body as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise MissingParameterError(message="Request body must be valid JSON") from None
    if not isinstance(payload, dict):
        raise MissingParameterError(message="Request body must be a JSON object")
    return payload


def validated_body(schema: type[ModelT], *, engine: str = DEFAULT_ENGINE) -> Callable[..., Any]:
    """Build a dependency that validates the request body or aborts the request."""

    async def dependency(request: Request):
        raw = await read_json_body(request)
        return validate(schema, raw, engine=engine).unwrap()

    return dependency
