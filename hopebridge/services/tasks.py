"""Service helpers for task management operations."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from hopebridge.core.auth import CallerIdentity
from hopebridge.core.errors import AlreadyExistsError
from hopebridge.core.errors import AppError
from hopebridge.core.errors import ErrorCode
from hopebridge.core.errors import MissingParameterError
from hopebridge.core.errors import NotFoundError
from hopebridge.db.models.project import utcnow
from hopebridge.db.models.task import Task
from hopebridge.db.models.task import TaskStatusEnum
from hopebridge.db.repository.tasks import count_tasks
from hopebridge.db.repository.tasks import create_task
from hopebridge.db.repository.tasks import get_task
from hopebridge.db.repository.tasks import list_tasks
from hopebridge.db.repository.tasks import update_task
from hopebridge.schemas.pagination import page_offset
from hopebridge.schemas.task import TaskCreate
from hopebridge.schemas.task import TaskReview
from hopebridge.schemas.task import TaskStatusUpdate
from hopebridge.schemas.task import TaskSubmit

logger = logging.getLogger(__name__)

_CLOSED_STATUSES = {TaskStatusEnum.COMPLETED.value, TaskStatusEnum.CANCELLED.value}


def _forbidden(message: str) -> AppError:
    return AppError(ErrorCode.UNAUTHORIZED, message, http_status=403)


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == []


def create_task_service(session: Session, payload: TaskCreate, *, caller: CallerIdentity) -> Task:
    """Create a task assigned by the calling manager."""
    task = create_task(
        session,
        title=payload.title,
        description=payload.description,
        assigned_to=payload.assigned_to,
        assigned_by=caller.subject,
        priority=payload.priority.value,
        form_fields=[field.model_dump(mode="json", exclude_none=True) for field in payload.form_fields],
        due_date=payload.due_date,
    )
    session.commit()
    logger.info("Created task %s for assignee %s", task.id, task.assigned_to)
    return task


def list_tasks_service(
    session: Session,
    *,
    caller: CallerIdentity,
    status: TaskStatusEnum | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Task], int]:
    """Managers see every task; everyone else sees only their own."""
    assigned_to = None if caller.is_manager else caller.subject
    status_value = status.value if status is not None else None
    tasks = list_tasks(
        session,
        assigned_to=assigned_to,
        status=status_value,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return tasks, count_tasks(session, assigned_to=assigned_to, status=status_value)


def get_task_service(session: Session, task_id: UUID, *, caller: CallerIdentity) -> Task:
    """Fetch a task visible to the caller."""
    task = get_task(session, task_id)
    if task is None:
        raise NotFoundError(message="Task not found", details={"id": str(task_id)})
    if not caller.is_manager and task.assigned_to != caller.subject:
        raise _forbidden("Access denied to this task")
    return task


def submit_task_service(session: Session, task_id: UUID, payload: TaskSubmit, *, caller: CallerIdentity) -> Task:
    """Store the assignee's form response and move the task to review."""
    task = get_task_service(session, task_id, caller=caller)
    if task.assigned_to != caller.subject:
        raise _forbidden("You can only submit tasks assigned to you")
    if task.status == TaskStatusEnum.SUBMITTED.value:
        raise AlreadyExistsError(message="Task has already been submitted")
    if task.status in _CLOSED_STATUSES:
        raise MissingParameterError(message=f"Cannot submit a {task.status} task")

    missing = [
        field
        for field in task.form_fields
        if field.get("required") and _is_blank(payload.response.get(field["id"]))
    ]
    if missing:
        raise MissingParameterError(
            message="Required fields missing: " + ", ".join(field["label"] for field in missing),
            details={"fields": [field["id"] for field in missing]},
        )

    task = update_task(
        session,
        task,
        {
            "status": TaskStatusEnum.SUBMITTED.value,
            "response": payload.response,
            "submitted_at": utcnow(),
        },
    )
    session.commit()
    logger.info("Task %s submitted", task.id)
    return task


def review_task_service(session: Session, task_id: UUID, payload: TaskReview) -> Task:
    """Complete a submitted task with the reviewer's comment."""
    task = get_task(session, task_id)
    if task is None:
        raise NotFoundError(message="Task not found", details={"id": str(task_id)})
    if task.status != TaskStatusEnum.SUBMITTED.value:
        raise MissingParameterError(message="Can only complete submitted tasks", details={"status": task.status})

    task = update_task(
        session,
        task,
        {
            "status": TaskStatusEnum.COMPLETED.value,
            "review_comment": payload.review_comment,
            "completed_at": utcnow(),
        },
    )
    session.commit()
    logger.info("Task %s completed", task.id)
    return task


def update_task_status_service(
    session: Session,
    task_id: UUID,
    payload: TaskStatusUpdate,
    *,
    caller: CallerIdentity,
) -> Task:
    """Move a task between the working states, or cancel it."""
    task = get_task_service(session, task_id, caller=caller)
    cancelling = payload.status == TaskStatusEnum.CANCELLED.value
    if task.status == TaskStatusEnum.COMPLETED.value and not cancelling:
        raise MissingParameterError(message="Cannot modify a completed task")
    if task.status == TaskStatusEnum.SUBMITTED.value and not cancelling:
        raise MissingParameterError(message="Task is submitted and awaiting review")

    task = update_task(session, task, {"status": payload.status})
    session.commit()
    return task
