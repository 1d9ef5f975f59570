"""Service helpers for donation API operations."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hopebridge.core.errors import AlreadyExistsError
from hopebridge.db.models.donation import Donation
from hopebridge.db.models.donation import DonationStatusEnum
from hopebridge.db.models.project import Project
from hopebridge.db.repository.donations import count_donations
from hopebridge.db.repository.donations import create_donation
from hopebridge.db.repository.donations import list_donations
from hopebridge.schemas.currency import ConversionRequest
from hopebridge.schemas.donation import DonationCreate
from hopebridge.schemas.pagination import page_offset
from hopebridge.services.currency import ExchangeRateService
from hopebridge.services.projects import get_project_service

logger = logging.getLogger(__name__)


def _credited_amount(project: Project, payload: DonationCreate, rates: ExchangeRateService) -> int:
    if payload.currency == project.currency:
        return payload.amount
    result = rates.convert(
        ConversionRequest(amount=payload.amount, from_currency=payload.currency, to_currency=project.currency),
    )
    return round(result.converted_amount)


def create_donation_service(session: Session, payload: DonationCreate, *, rates: ExchangeRateService) -> Donation:
    """Record a donation and credit the project in one transaction."""
    project = get_project_service(session, payload.project_id)
    credited = _credited_amount(project, payload, rates)
    try:
        donation = create_donation(
            session,
            project_id=project.id,
            donor_name=payload.donor_name,
            donor_email=payload.donor_email,
            amount=payload.amount,
            currency=payload.currency,
            credited_amount=credited,
            payment_method=payload.payment_method.value,
            transaction_id=payload.transaction_id,
            anonymous=payload.anonymous,
            message=payload.message,
        )
        project.raised_amount += credited
        session.commit()
    except IntegrityError:
        session.rollback()
        raise AlreadyExistsError(
            message="A donation with this transaction id already exists",
            details={"field": "transaction_id"},
        ) from None

    logger.info("Recorded donation %s for project %s (credited=%s %s)", donation.id, project.id, credited, project.currency)
    return donation


def list_donations_service(
    session: Session,
    *,
    status: DonationStatusEnum | None = None,
    project_id: UUID | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Donation], int]:
    """Return one page of donations and the total matching count."""
    status_value = status.value if status is not None else None
    donations = list_donations(
        session,
        status=status_value,
        project_id=project_id,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return donations, count_donations(session, status=status_value, project_id=project_id)
