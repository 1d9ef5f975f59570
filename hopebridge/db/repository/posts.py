"""Repository primitives for post entities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.post import Post


def create_post(
    session: Session,
    *,
    category: str,
    contents: list[dict[str, Any]],
    images: list[str] | None = None,
    videos: list[str] | None = None,
) -> Post:
    """Create and return a post row."""
    post = Post(category=category, contents=contents, images=images or [], videos=videos or [])
    session.add(post)
    session.flush()
    session.refresh(post)
    return post


def get_post(session: Session, post_id: UUID) -> Post | None:
    """Fetch a post by id."""
    return session.get(Post, post_id)


def list_posts(
    session: Session,
    *,
    category: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Post]:
    """List posts with an optional category filter."""
    stmt = select(Post)
    if category is not None:
        stmt = stmt.where(Post.category == category)
    stmt = stmt.order_by(Post.created_at.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def update_post(session: Session, post: Post, updates: Mapping[str, Any]) -> Post:
    """Apply field updates to a post."""
    for name, value in updates.items():
        setattr(post, name, value)
    session.flush()
    session.refresh(post)
    return post


def delete_post(session: Session, post: Post) -> None:
    """Delete a post row."""
    session.delete(post)
    session.flush()
