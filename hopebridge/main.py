"""FastAPI application entrypoint for HopeBridge."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from hopebridge.api.analytics import router as analytics_router
from hopebridge.api.currency import router as currency_router
from hopebridge.api.donations import router as donations_router
from hopebridge.api.posts import router as posts_router
from hopebridge.api.projects import router as projects_router
from hopebridge.api.tasks import router as tasks_router
from hopebridge.api.users import router as users_router
from hopebridge.core.auth import IdentityResolver
from hopebridge.core.auth import StaticTokenResolver
from hopebridge.core.config import Settings
from hopebridge.core.config import get_settings
from hopebridge.core.handlers import register_error_handlers
from hopebridge.core.logging import configure_logging
from hopebridge.db import models as _models  # noqa: F401
from hopebridge.integrations.exchange_rates import ExchangeRateClient
from hopebridge.services.currency import ExchangeRateService
from hopebridge.services.currency import RateCache

logger = logging.getLogger(__name__)


def build_exchange_rate_service(settings: Settings) -> ExchangeRateService:
    """Wire the rate feed client to a fresh cache."""
    client = ExchangeRateClient(
        url=settings.exchange_rate_api_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    return ExchangeRateService(client, RateCache(ttl_seconds=settings.exchange_rate_ttl_seconds))


def create_app(
    *,
    settings: Settings | None = None,
    identity_resolver: IdentityResolver | None = None,
    exchange_rates: ExchangeRateService | None = None,
) -> FastAPI:
    """Build the API with its app-owned collaborators."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        logger.info("Starting HopeBridge API with settings=%s", settings.safe_for_logging())
        yield

    app = FastAPI(title="HopeBridge", lifespan=lifespan)
    app.state.settings = settings
    app.state.identity_resolver = identity_resolver or StaticTokenResolver(settings.api_tokens)
    app.state.exchange_rates = exchange_rates or build_exchange_rate_service(settings)

    register_error_handlers(app)
    app.include_router(projects_router)
    app.include_router(posts_router)
    app.include_router(users_router)
    app.include_router(analytics_router)
    app.include_router(currency_router)
    app.include_router(donations_router)
    app.include_router(tasks_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check stub endpoint for service readiness."""
        return {"status": "ok"}

    return app


app = create_app()
