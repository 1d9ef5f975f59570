"""Post API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hopebridge.core.auth import CallerIdentity
from hopebridge.core.auth import require_manager
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import validated_body
from hopebridge.db.base import get_db_session
from hopebridge.db.models.post import PostCategoryEnum
from hopebridge.schemas.post import Post
from hopebridge.schemas.post import PostCreate
from hopebridge.schemas.post import PostUpdate
from hopebridge.services.posts import create_post_service
from hopebridge.services.posts import delete_post_service
from hopebridge.services.posts import get_post_service
from hopebridge.services.posts import list_posts_service
from hopebridge.services.posts import update_post_service

router = APIRouter(prefix="/api/v1", tags=["posts"])


@router.get("/posts")
@with_error_handler
def list_posts_endpoint(
    category: PostCategoryEnum | None = None,
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """List posts, optionally filtered by category."""
    posts = list_posts_service(session, category=category)
    return success_response("Posts retrieved successfully.", [Post.model_validate(post) for post in posts])


@router.get("/posts/{post_id}")
@with_error_handler
def get_post_endpoint(
    post_id: UUID,
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Get a single post by id."""
    post = get_post_service(session, post_id)
    return success_response("Post retrieved successfully.", Post.model_validate(post))


@router.post("/posts")
@with_error_handler
def create_post_endpoint(
    caller: CallerIdentity = Depends(require_manager),
    payload: PostCreate = Depends(validated_body(PostCreate)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Create a post."""
    post = create_post_service(session, payload)
    return success_response("Post created successfully.", Post.model_validate(post), status_code=201)


@router.patch("/posts/{post_id}")
@with_error_handler
def update_post_endpoint(
    post_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    payload: PostUpdate = Depends(validated_body(PostUpdate)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Update the provided fields of a post."""
    post = update_post_service(session, post_id, payload)
    return success_response("Post updated successfully.", Post.model_validate(post))


@router.delete("/posts/{post_id}")
@with_error_handler
def delete_post_endpoint(
    post_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Delete a post."""
    delete_post_service(session, post_id)
    return success_response("Post deleted successfully.", {"id": str(post_id)})
