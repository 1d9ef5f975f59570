"""Service helpers for post API operations."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from hopebridge.core.errors import MissingParameterError
from hopebridge.core.errors import NotFoundError
from hopebridge.db.models.post import Post
from hopebridge.db.models.post import PostCategoryEnum
from hopebridge.db.repository.posts import create_post
from hopebridge.db.repository.posts import delete_post
from hopebridge.db.repository.posts import get_post
from hopebridge.db.repository.posts import list_posts
from hopebridge.db.repository.posts import update_post
from hopebridge.schemas.post import PostCreate
from hopebridge.schemas.post import PostUpdate


def _storable(payload: PostCreate | PostUpdate) -> dict[str, Any]:
    data = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    if isinstance(payload, PostCreate):
        data.setdefault("images", [])
        data.setdefault("videos", [])
    return data


def create_post_service(session: Session, payload: PostCreate) -> Post:
    """Create and persist a new post."""
    data = _storable(payload)
    post = create_post(
        session,
        category=data["category"],
        contents=data["contents"],
        images=data["images"],
        videos=data["videos"],
    )
    session.commit()
    return post


def list_posts_service(session: Session, *, category: PostCategoryEnum | None = None) -> list[Post]:
    """List posts with an optional category filter."""
    return list_posts(session, category=category.value if category else None)


def get_post_service(session: Session, post_id: UUID) -> Post:
    """Fetch a post or raise not found."""
    post = get_post(session, post_id)
    if post is None:
        raise NotFoundError(message="Post not found", details={"id": str(post_id)})
    return post


def update_post_service(session: Session, post_id: UUID, payload: PostUpdate) -> Post:
    """Update the provided fields of an existing post."""
    updates = _storable(payload)
    if not updates:
        raise MissingParameterError(message="No updatable post fields were provided.")
    post = get_post_service(session, post_id)
    post = update_post(session, post, updates)
    session.commit()
    return post


def delete_post_service(session: Session, post_id: UUID) -> None:
    """Delete an existing post."""
    post = get_post_service(session, post_id)
    delete_post(session, post)
    session.commit()
