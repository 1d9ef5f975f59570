"""Service helpers for user API operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hopebridge.core.errors import AlreadyExistsError
from hopebridge.core.errors import NotFoundError
from hopebridge.db.models.user import User
from hopebridge.db.repository.users import create_user
from hopebridge.db.repository.users import get_user
from hopebridge.db.repository.users import list_users
from hopebridge.schemas.user import UserCreate


def create_user_service(session: Session, payload: UserCreate) -> User:
    """Create a user, rejecting duplicate emails."""
    try:
        user = create_user(
            session,
            name=payload.name,
            email=payload.email,
            role=payload.role,
            department=payload.department,
        )
        session.commit()
        return user
    except IntegrityError:
        session.rollback()
        raise AlreadyExistsError(
            message="A user with this email already exists",
            details={"field": "email"},
        ) from None


def list_users_service(session: Session, *, role: str | None = None) -> list[User]:
    """List users with an optional role filter."""
    return list_users(session, role=role)


def get_user_service(session: Session, user_id: UUID) -> User:
    """Fetch a user or raise not found."""
    user = get_user(session, user_id)
    if user is None:
        raise NotFoundError(message="User not found", details={"id": str(user_id)})
    return user
