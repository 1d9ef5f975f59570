"""Service helpers for project API operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from hopebridge.core.errors import MissingParameterError
from hopebridge.core.errors import NotFoundError
from hopebridge.db.models.project import Project
from hopebridge.db.repository.projects import create_project
from hopebridge.db.repository.projects import delete_project
from hopebridge.db.repository.projects import get_project
from hopebridge.db.repository.projects import list_projects
from hopebridge.db.repository.projects import update_project
from hopebridge.schemas.project import ProjectCreate
from hopebridge.schemas.project import ProjectUpdate


def create_project_service(session: Session, payload: ProjectCreate) -> Project:
    """Create and persist a new project."""
    project = create_project(session, **payload.model_dump())
    session.commit()
    return project


def list_projects_service(session: Session, *, published_only: bool = False) -> list[Project]:
    """List projects, optionally only the published ones."""
    return list_projects(session, published_only=published_only)


def get_project_service(session: Session, project_id: UUID) -> Project:
    """Fetch a project or raise not found."""
    project = get_project(session, project_id)
    if project is None:
        raise NotFoundError(message="Project not found", details={"id": str(project_id)})
    return project


def update_project_service(session: Session, project_id: UUID, payload: ProjectUpdate) -> Project:
    """Update mutable project fields for an existing project."""
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise MissingParameterError(message="No updatable project fields were provided.")
    project = get_project_service(session, project_id)
    project = update_project(session, project, updates)
    session.commit()
    return project


def delete_project_service(session: Session, project_id: UUID) -> None:
    """Delete an existing project."""
    project = get_project_service(session, project_id)
    delete_project(session, project)
    session.commit()
