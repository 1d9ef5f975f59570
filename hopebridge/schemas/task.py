"""Pydantic schemas for task management payloads."""

from __future__ import annotations

from datetime import date
from datetime import datetime
from enum import Enum
from typing import Any
from typing import Literal
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from hopebridge.db.models.task import TaskPriorityEnum
from hopebridge.db.models.task import TaskStatusEnum
from hopebridge.schemas.pagination import Pagination


class FormFieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"


class FormField(BaseModel):
    """One input the assignee fills in when submitting the task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(min_length=1, max_length=64)
    type: FormFieldType
    label: str = Field(min_length=1, max_length=200)
    required: bool = False
    placeholder: str | None = Field(default=None, max_length=200)
    options: list[str] | None = None


class TaskCreate(BaseModel):
    """Payload to create and assign a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    assigned_to: str = Field(min_length=1, max_length=64)
    priority: TaskPriorityEnum = TaskPriorityEnum.MEDIUM
    form_fields: list[FormField] = Field(min_length=1)
    due_date: date | None = None

    @field_validator("form_fields")
    @classmethod
    def _unique_field_ids(cls, fields: list[FormField]) -> list[FormField]:
        ids = [field.id for field in fields]
        if len(ids) != len(set(ids)):
            raise ValueError("Form field ids must be unique")
        return fields


class TaskSubmit(BaseModel):
    response: dict[str, Any]


class TaskReview(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    review_comment: str = Field(min_length=1, max_length=1000)


class TaskStatusUpdate(BaseModel):
    status: Literal["pending", "in_progress", "cancelled"]


class Task(BaseModel):
    """Task response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    assigned_to: str
    assigned_by: str
    priority: TaskPriorityEnum
    status: TaskStatusEnum
    form_fields: list[FormField]
    response: dict[str, Any] | None = None
    review_comment: str | None = None
    due_date: date | None = None
    submitted_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TaskPage(BaseModel):
    items: list[Task]
    pagination: Pagination
