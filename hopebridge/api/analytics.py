"""Visitor analytics routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from hopebridge.api.deps import get_app_settings
from hopebridge.core.auth import CallerIdentity
from hopebridge.core.auth import require_manager
from hopebridge.core.config import Settings
from hopebridge.core.errors import MissingParameterError
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import read_json_body
from hopebridge.core.validation import validate
from hopebridge.db.base import get_db_session
from hopebridge.schemas.visit import VisitPayload
from hopebridge.services.visits import clamp_number
from hopebridge.services.visits import get_visit_summary_service
from hopebridge.services.visits import record_visit_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.post("/visit")
@with_error_handler
async def record_visit_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Record a page visit from a beacon; the body is best effort."""
    try:
        raw = await read_json_body(request)
    except MissingParameterError:
        logger.debug("Ignoring unreadable visit beacon body")
        raw = {}

    result = validate(VisitPayload, raw)
    payload = result.value if result.ok else VisitPayload()

    await run_in_threadpool(
        record_visit_service,
        session,
        payload,
        request.headers,
        hash_secret=settings.visitor_hash_secret,
    )
    return JSONResponse(
        status_code=202,
        content={"success": True, "message": "Visit recorded successfully."},
        headers={"Cache-Control": "no-store"},
    )


@router.get("/visits/summary")
@with_error_handler
def get_visit_summary_endpoint(
    recent: str | None = None,
    days: str | None = None,
    caller: CallerIdentity = Depends(require_manager),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """Summarize visits for the admin dashboard."""
    summary = get_visit_summary_service(
        session,
        recent_limit=clamp_number(recent, 1, 500, 100),
        daily_window=clamp_number(days, 1, 30, 7),
    )
    return success_response("Visit summary retrieved successfully.", summary)
