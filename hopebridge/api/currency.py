"""Currency routes backing the donation widget."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import JSONResponse

from hopebridge.api.deps import get_exchange_rate_service
from hopebridge.core.handlers import with_error_handler
from hopebridge.core.responses import success_response
from hopebridge.core.validation import validated_body
from hopebridge.schemas.currency import ConversionRequest
from hopebridge.services.currency import ExchangeRateService

router = APIRouter(prefix="/api/v1/currency", tags=["currency"])


@router.get("/rates")
@with_error_handler
def get_rates_endpoint(
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> JSONResponse:
    """Return the current EUR-based exchange rates."""
    return success_response(
        "Exchange rates retrieved successfully.",
        service.get_rates(),
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.post("/convert")
@with_error_handler
def convert_endpoint(
    payload: ConversionRequest = Depends(validated_body(ConversionRequest)),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> JSONResponse:
    """Convert a donation amount between two currencies."""
    return success_response("Amount converted successfully.", service.convert(payload))
