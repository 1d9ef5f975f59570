"""SQLAlchemy model for volunteer tasks with dynamic forms."""

from __future__ import annotations

import uuid
from datetime import date
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import CheckConstraint
from sqlalchemy import Date
from sqlalchemy import DateTime
from sqlalchemy import Index
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from hopebridge.db.models.post import JSONColumn
from hopebridge.db.models.project import Base
from hopebridge.db.models.project import utcnow


class TaskPriorityEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatusEnum(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Task(Base):
    """Task assigned to a caller subject, answered through its form fields."""

    __tablename__ = "tasks"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_tasks"),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_tasks_priority",
        ),
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'submitted', 'completed', 'cancelled')",
            name="ck_tasks_status",
        ),
        Index("ix_tasks_assigned_to_status", "assigned_to", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    assigned_to: Mapped[str] = mapped_column(String(64), nullable=False)
    assigned_by: Mapped[str] = mapped_column(String(64), nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default=TaskPriorityEnum.MEDIUM.value)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=TaskStatusEnum.PENDING.value)
    form_fields: Mapped[list[dict[str, Any]]] = mapped_column(JSONColumn, nullable=False, default=list)
    response: Mapped[dict[str, Any] | None] = mapped_column(JSONColumn, nullable=True)
    review_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
