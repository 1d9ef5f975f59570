"""SQLAlchemy model for charity projects."""

from __future__ import annotations

import uuid
from datetime import datetime
from datetime import timezone

from sqlalchemy import Boolean
from sqlalchemy import CheckConstraint
from sqlalchemy import DateTime
from sqlalchemy import Integer
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy import Uuid
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column


class Base(DeclarativeBase):
    """Declarative base for HopeBridge ORM models."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Fundraising project shown on the public site."""

    __tablename__ = "projects"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_projects"),
        CheckConstraint("goal_amount >= 0", name="ck_projects_goal_amount_non_negative"),
        CheckConstraint("raised_amount >= 0", name="ck_projects_raised_amount_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    goal_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    raised_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
