"""Pydantic schemas for visitor analytics."""

from __future__ import annotations

from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class VisitPayload(BaseModel):
    """Best-effort visit beacon body; every field is optional."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    path: str | None = Field(default=None, max_length=2048)
    locale: str | None = Field(default=None, max_length=16)
    project_id: str | None = Field(default=None, alias="projectId", max_length=64)
    referrer: str | None = None
    country: str | None = Field(default=None, max_length=8)


class RecentVisit(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    path: str
    locale: str | None = None
    project_id: str | None = None
    country: str | None = None
    visited_at: datetime


class PathCount(BaseModel):
    path: str
    count: int


class DailyCount(BaseModel):
    day: date
    count: int


class VisitSummary(BaseModel):
    """Visit totals for the admin dashboard."""

    total_visits: int
    window_days: int
    top_paths: list[PathCount]
    daily: list[DailyCount]
    recent: list[RecentVisit]
