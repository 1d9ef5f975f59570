"""Pydantic schemas for project API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class ProjectCreate(BaseModel):
    """Payload to create a project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    summary: str | None = None
    goal_amount: int = Field(default=0, ge=0)
    raised_amount: int = Field(default=0, ge=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    is_published: bool = False

    @field_validator("currency")
    @classmethod
    def _uppercase_currency(cls, value: str | None) -> str | None:
        return value.upper() if value is not None else None


class ProjectUpdate(BaseModel):
    """Payload to update mutable project fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=255)
    summary: str | None = None
    goal_amount: int | None = Field(default=None, ge=0)
    raised_amount: int | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    is_published: bool | None = None

    @field_validator("currency")
    @classmethod
    def _uppercase_currency(cls, value: str | None) -> str | None:
        return value.upper() if value is not None else None


class Project(BaseModel):
    """Project response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    summary: str | None = None
    goal_amount: int
    raised_amount: int
    currency: str
    is_published: bool
    created_at: datetime
    updated_at: datetime
