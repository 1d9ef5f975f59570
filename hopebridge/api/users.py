"""User API routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hopebridge.core.auth import CallerIdentity
from hopebridge.core.auth import require_manager
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import RequestValidationFailure
from hopebridge.core.validation import read_json_body
from hopebridge.core.validation import validate
from hopebridge.db.base import get_db_session
from hopebridge.schemas.user import User
from hopebridge.schemas.user import UserCreate
from hopebridge.services.users import create_user_service
from hopebridge.services.users import get_user_service
from hopebridge.services.users import list_users_service

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.get("/users")
@with_error_handler
def list_users_endpoint(
    role: str | None = None,
    caller: CallerIdentity = Depends(require_manager),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """List users."""
    users = list_users_service(session, role=role)
    return success_response("Users retrieved successfully.", [User.model_validate(user) for user in users])


@router.get("/users/{user_id}")
@with_error_handler
def get_user_endpoint(
    user_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Get a single user by id."""
    user = get_user_service(session, user_id)
    return success_response("User retrieved successfully.", User.model_validate(user))


@router.post("/users")
@with_error_handler
def create_user_endpoint(
    caller: CallerIdentity = Depends(require_manager),
    body: dict[str, Any] = Depends(read_json_body),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Create a user."""
    result = validate(UserCreate, body)
    if result.error is not None:
        raise RequestValidationFailure(result.error)
    user = create_user_service(session, result.value)
    return success_response("User created successfully.", User.model_validate(user), status_code=201)
