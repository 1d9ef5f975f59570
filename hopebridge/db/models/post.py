"""SQLAlchemy model for news posts and stories."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import JSON
from sqlalchemy import CheckConstraint
from sqlalchemy import DateTime
from sqlalchemy import Index
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from hopebridge.db.models.project import Base
from hopebridge.db.models.project import utcnow

JSONColumn = JSON().with_variant(JSONB(), "postgresql")


class PostCategoryEnum(str, Enum):
    PROJECT = "project"
    NEWS = "news"
    STORY = "story"


class Post(Base):
    """Multilingual post with per-language content blocks."""

    __tablename__ = "posts"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_posts"),
        CheckConstraint(
            "category IN ('project', 'news', 'story')",
            name="ck_posts_category",
        ),
        Index("ix_posts_category_created_at", "category", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category: Mapped[str] = mapped_column(String(16), nullable=False)
    contents: Mapped[list[dict[str, Any]]] = mapped_column(JSONColumn, nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(JSONColumn, nullable=False, default=list)
    videos: Mapped[list[str]] = mapped_column(JSONColumn, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
