"""Pydantic schemas for post API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import HttpUrl
from pydantic import field_validator

from hopebridge.db.models.post import PostCategoryEnum

INCOMPLETE_CONTENTS_MESSAGE = "At least one language must have complete content"


class ContentBlock(BaseModel):
    """Post text for one language."""

    model_config = ConfigDict(str_strip_whitespace=True)

    language_code: str = Field(max_length=2)
    name: str = Field(default="", max_length=100)
    description: str = Field(default="", max_length=300)
    content: str = ""

    def is_complete(self) -> bool:
        return bool(self.name and self.description and self.content)


def require_complete_block(contents: list[ContentBlock] | None) -> list[ContentBlock] | None:
    if contents is not None and not any(block.is_complete() for block in contents):
        raise ValueError(INCOMPLETE_CONTENTS_MESSAGE)
    return contents


class PostCreate(BaseModel):
    """Payload to create a post."""

    category: PostCategoryEnum
    contents: list[ContentBlock] = Field(min_length=1)
    images: list[HttpUrl] = Field(default_factory=list)
    videos: list[HttpUrl] = Field(default_factory=list)

    @field_validator("contents")
    @classmethod
    def _require_complete_block(cls, contents: list[ContentBlock] | None) -> list[ContentBlock] | None:
        return require_complete_block(contents)


class PostUpdate(BaseModel):
    """Payload to update mutable post fields."""

    category: PostCategoryEnum | None = None
    contents: list[ContentBlock] | None = Field(default=None, min_length=1)
    images: list[HttpUrl] | None = None
    videos: list[HttpUrl] | None = None

    @field_validator("contents")
    @classmethod
    def _require_complete_block(cls, contents: list[ContentBlock] | None) -> list[ContentBlock] | None:
        return require_complete_block(contents)


class Post(BaseModel):
    """Post response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: PostCategoryEnum
    contents: list[ContentBlock]
    images: list[str]
    videos: list[str]
    created_at: datetime
    updated_at: datetime
