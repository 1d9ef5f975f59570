"""Pydantic schemas for user API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

Role = Literal["admin", "manager", "developer", "designer", "tester", "user"]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """Payload to create a dashboard user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    role: Role = "user"
    department: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class User(BaseModel):
    """User response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    department: str | None = None
    created_at: datetime
    updated_at: datetime
