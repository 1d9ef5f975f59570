"""Donation API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hopebridge.api.deps import get_exchange_rate_service
from hopebridge.core.auth import CallerIdentity
from hopebridge.core.auth import require_manager
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import validated_body
from hopebridge.db.base import get_db_session
from hopebridge.db.models.donation import DonationStatusEnum
from hopebridge.schemas.donation import Donation
from hopebridge.schemas.donation import DonationCreate
from hopebridge.schemas.donation import DonationPage
from hopebridge.schemas.pagination import MAX_PAGE_SIZE
from hopebridge.schemas.pagination import Pagination
from hopebridge.services.currency import ExchangeRateService
from hopebridge.services.donations import create_donation_service
from hopebridge.services.donations import list_donations_service

router = APIRouter(prefix="/api/v1", tags=["donations"])


@router.get("/donations")
@with_error_handler
def list_donations_endpoint(
    caller: CallerIdentity = Depends(require_manager),
    status: DonationStatusEnum | None = None,
    project_id: UUID | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    session: Session = Depends(get_db_session),
) -> JSONResponse:
    """List donations for the admin dashboard, newest first."""
    donations, total = list_donations_service(
        session,
        status=status,
        project_id=project_id,
        page=page,
        limit=limit,
    )
    result = DonationPage(
        items=[Donation.model_validate(donation) for donation in donations],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )
    return success_response("Donations retrieved successfully.", result)


@router.post("/donations")
@with_error_handler
def create_donation_endpoint(
    payload: DonationCreate = Depends(validated_body(DonationCreate)),
    session: Session = Depends(get_db_session),
    rates: ExchangeRateService = Depends(get_exchange_rate_service),
) -> JSONResponse:
    """Record a donation and credit its project."""
    donation = create_donation_service(session, payload, rates=rates)
    return success_response("Donation created successfully.", Donation.model_validate(donation), status_code=201)
