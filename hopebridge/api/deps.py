"""Dependencies resolving app-owned collaborators."""

from __future__ import annotations

from fastapi import Request

from hopebridge.core.config import Settings
from hopebridge.services.currency import ExchangeRateService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_exchange_rate_service(request: Request) -> ExchangeRateService:
    return request.app.state.exchange_rates
