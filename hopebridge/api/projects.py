"""Project API routes."""

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
from hopebridge.core.validation import read_json_body
from hopebridge.core.validation import validate
from hopebridge.db.base import get_db_session
from hopebridge.schemas.project import Project
from hopebridge.schemas.project import ProjectCreate
from hopebridge.schemas.project import ProjectUpdate
from hopebridge.services.projects import create_project_service
from hopebridge.services.projects import delete_project_service
from hopebridge.services.projects import get_project_service
from hopebridge.services.projects import list_projects_service
from hopebridge.services.projects import update_project_service

router = APIRouter(prefix="/api/v1", tags=["projects"])

PUBLIC_CACHE_HEADERS = {
    "Cache-Control": "public, s-maxage=120, stale-while-revalidate=600",
    "CDN-Cache-Control": "public, s-maxage=600",
}


@router.get("/projects")
@with_error_handler
def list_projects_endpoint(
    published_only: bool = False,
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """List projects."""
    projects = list_projects_service(session, published_only=published_only)
    return success_response(
        "Projects retrieved successfully.",
        [Project.model_validate(project) for project in projects],
        headers=PUBLIC_CACHE_HEADERS,
    )


@router.get("/projects/{project_id}")
@with_error_handler
def get_project_endpoint(
    project_id: UUID,
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Get a single project by id."""
    project = get_project_service(session, project_id)
    return success_response(
        "Project retrieved successfully.",
        Project.model_validate(project),
        headers=PUBLIC_CACHE_HEADERS,
    )


@router.post("/projects")
@with_error_handler
def create_project_endpoint(
    caller: CallerIdentity = Depends(require_manager),
    body: dict[str, Any] = Depends(read_json_body),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Create a project."""
    payload = validate(ProjectCreate, body).unwrap()
    project = create_project_service(session, payload)
    return success_response("Project created successfully.", Project.model_validate(project), status_code=201)


@router.patch("/projects/{project_id}")
@with_error_handler
def update_project_endpoint(
    project_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    body: dict[str, Any] = Depends(read_json_body),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Update a project."""
    payload = validate(ProjectUpdate, body).unwrap()
    project = update_project_service(session, project_id, payload)
    return success_response("Project updated successfully.", Project.model_validate(project))


@router.delete("/projects/{project_id}")
@with_error_handler
def delete_project_endpoint(
    project_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Delete a project."""
    delete_project_service(session, project_id)
    return success_response("Project deleted successfully.", {"id": str(project_id)})
