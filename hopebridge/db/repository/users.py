"""Repository primitives for user entities."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.user import User


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    role: str = "user",
    department: str | None = None,
) -> User:
    """Create and return a user row."""
    user = User(name=name, email=email, role=role, department=department)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: UUID) -> User | None:
    """Fetch a user by id."""
    return session.get(User, user_id)


def list_users(session: Session, *, role: str | None = None, limit: int = 100, offset: int = 0) -> list[User]:
    """List users with an optional role filter."""
    stmt = select(User)
    if role is not None:
        stmt = stmt.where(User.role == role)
    stmt = stmt.order_by(User.created_at.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))
