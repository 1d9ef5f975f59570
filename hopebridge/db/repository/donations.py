"""Repository primitives for donation entities."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.donation import Donation


def create_donation(session: Session, **fields: Any) -> Donation:
    """Create and return a donation row."""
    donation = Donation(**fields)
    session.add(donation)
    session.flush()
    session.refresh(donation)
    return donation


def _filtered(stmt: Select, *, status: str | None, project_id: UUID | None) -> Select:
    if status is not None:
        stmt = stmt.where(Donation.status == status)
    if project_id is not None:
        stmt = stmt.where(Donation.project_id == project_id)
    return stmt


def list_donations(
    session: Session,
    *,
    status: str | None = None,
    project_id: UUID | None = None,
    limit: int = 10,
    offset: int = 0,
) -> list[Donation]:
    """List donations newest first with optional filters."""
    stmt = _filtered(select(Donation), status=status, project_id=project_id)
    stmt = stmt.order_by(Donation.created_at.desc(), Donation.id).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def count_donations(
    session: Session,
    *,
    status: str | None = None,
    project_id: UUID | None = None,
) -> int:
    """Count donations matching the list filters."""
    stmt = _filtered(select(func.count()).select_from(Donation), status=status, project_id=project_id)
    return session.scalar(stmt) or 0
