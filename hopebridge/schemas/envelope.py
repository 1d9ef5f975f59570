"""Response envelope schemas shared across API handlers."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from hopebridge.core.errors import ErrorCode


class ErrorObject(BaseModel):
    """Formatted error carried by a failure envelope."""

    model_config = ConfigDict(populate_by_name=True)

    code: ErrorCode
    cause: str
    created_at: datetime = Field(alias="createdAt")
    details: dict[str, Any] | None = None


class SuccessEnvelope(BaseModel):
    """Envelope for a successful operation."""

    success: Literal[True] = True
    message: str
    details: Any = None
    timestamp: datetime


class FailureEnvelope(BaseModel):
    """Envelope for a failed operation."""

    success: Literal[False] = False
    message: str
    error: ErrorObject
    timestamp: datetime
