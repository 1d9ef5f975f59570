"""Repository primitives for project entities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.project import Project


def create_project(session: Session, **fields: Any) -> Project:
    """Create and return a project row."""
    project = Project(**fields)
    session.add(project)
    session.flush()
    session.refresh(project)
    return project


def get_project(session: Session, project_id: UUID) -> Project | None:
    """Fetch a project by id."""
    return session.get(Project, project_id)


def list_projects(
    session: Session,
    *,
    published_only: bool = False,
    limit: int = 100,
    offset: int = 0,
) -> list[Project]:
    """List projects, newest first."""
    stmt = select(Project)
    if published_only:
        stmt = stmt.where(Project.is_published.is_(True))
    stmt = stmt.order_by(Project.created_at.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def update_project(session: Session, project: Project, updates: Mapping[str, Any]) -> Project:
    """Apply field updates to a project."""
    for name, value in updates.items():
        setattr(project, name, value)
    session.flush()
    session.refresh(project)
    return project


def delete_project(session: Session, project: Project) -> None:
    """Delete a project row."""
    session.delete(project)
    session.flush()
