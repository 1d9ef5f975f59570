"""Repository primitives for task entities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.task import Task


def create_task(session: Session, **fields: Any) -> Task:
    """Create and return a task row."""
    task = Task(**fields)
    session.add(task)
    session.flush()
    session.refresh(task)
    return task


def get_task(session: Session, task_id: UUID) -> Task | None:
    """Fetch a task by id."""
    return session.get(Task, task_id)


def _filtered(stmt: Select, *, assigned_to: str | None, status: str | None) -> Select:
    if assigned_to is not None:
        stmt = stmt.where(Task.assigned_to == assigned_to)
    if status is not None:
        stmt = stmt.where(Task.status == status)
    return stmt


def list_tasks(
    session: Session,
    *,
    assigned_to: str | None = None,
    status: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> list[Task]:
    """List tasks newest first."""
    stmt = _filtered(select(Task), assigned_to=assigned_to, status=status)
    stmt = stmt.order_by(Task.created_at.desc(), Task.id).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def count_tasks(session: Session, *, assigned_to: str | None = None, status: str | None = None) -> int:
    """Count tasks matching the list filters."""
    stmt = _filtered(select(func.count()).select_from(Task), assigned_to=assigned_to, status=status)
    return session.scalar(stmt) or 0


def update_task(session: Session, task: Task, updates: Mapping[str, Any]) -> Task:
    """Apply field updates to a task."""
    for name, value in updates.items():
        setattr(task, name, value)
    session.flush()
    session.refresh(task)
    return task
