"""Task management API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hopebridge.core.auth import CallerIdentity
from hopebridge.core.auth import require_caller
from hopebridge.core.auth import require_manager
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import validated_body
from hopebridge.db.base import get_db_session
from hopebridge.db.models.task import TaskStatusEnum
from hopebridge.schemas.pagination import MAX_PAGE_SIZE
from hopebridge.schemas.pagination import Pagination
from hopebridge.schemas.task import Task
from hopebridge.schemas.task import TaskCreate
from hopebridge.schemas.task import TaskPage
from hopebridge.schemas.task import TaskReview
from hopebridge.schemas.task import TaskStatusUpdate
from hopebridge.schemas.task import TaskSubmit
from hopebridge.services.tasks import create_task_service
from hopebridge.services.tasks import get_task_service
from hopebridge.services.tasks import list_tasks_service
from hopebridge.services.tasks import review_task_service
from hopebridge.services.tasks import submit_task_service
from hopebridge.services.tasks import update_task_status_service

router = APIRouter(prefix="/api/v1", tags=["tasks"])


@router.get("/tasks")
@with_error_handler
def list_tasks_endpoint(
    caller: CallerIdentity = Depends(require_caller),
    status: TaskStatusEnum | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """List the tasks visible to the caller."""
    tasks, total = list_tasks_service(session, caller=caller, status=status, page=page, limit=limit)
    result = TaskPage(
        items=[Task.model_validate(task) for task in tasks],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )
    return success_response("Tasks retrieved successfully.", result)


@router.post("/tasks")
@with_error_handler
def create_task_endpoint(
    caller: CallerIdentity = Depends(require_manager),
    payload: TaskCreate = Depends(validated_body(TaskCreate)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Create and assign a task."""
    task = create_task_service(session, payload, caller=caller)
    return success_response("Task created successfully.", Task.model_validate(task), status_code=201)


@router.get("/tasks/{task_id}")
@with_error_handler
def get_task_endpoint(
    task_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    task = get_task_service(session, task_id, caller=caller)
    return success_response("Task retrieved successfully.", Task.model_validate(task))


@router.post("/tasks/{task_id}/submit")
@with_error_handler
def submit_task_endpoint(
    task_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    payload: TaskSubmit = Depends(validated_body(TaskSubmit)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Submit the assignee's form response."""
    task = submit_task_service(session, task_id, payload, caller=caller)
    return success_response("Task submitted successfully.", Task.model_validate(task))


@router.post("/tasks/{task_id}/review")
@with_error_handler
def review_task_endpoint(
    task_id: UUID,
    caller: CallerIdentity = Depends(require_manager),
    payload: TaskReview = Depends(validated_body(TaskReview)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Complete a submitted task."""
    task = review_task_service(session, task_id, payload)
    return success_response("Task completed successfully.", Task.model_validate(task))


@router.patch("/tasks/{task_id}/status")
@with_error_handler
def update_task_status_endpoint(
    task_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    payload: TaskStatusUpdate = Depends(validated_body(TaskStatusUpdate)),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    task = update_task_status_service(session, task_id, payload, caller=caller)
    return success_response("Task status updated successfully.", Task.model_validate(task))
