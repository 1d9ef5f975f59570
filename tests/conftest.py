"""Shared pytest fixtures for HopeBridge test suites."""

from collections.abc import Generator
from datetime import date
import os
from pathlib import Path
import sys

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("HOPEBRIDGE_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from hopebridge.core.config import Settings  # noqa: E402
from hopebridge.db.base import get_db_session  # noqa: E402
from hopebridge.db.models import Base  # noqa: E402
from hopebridge.integrations.exchange_rates import ExchangeRateRequestError  # noqa: E402
from hopebridge.main import create_app  # noqa: E402
from hopebridge.schemas.currency import ExchangeRates  # noqa: E402
from hopebridge.services.currency import ExchangeRateService  # noqa: E402
from hopebridge.services.currency import RateCache  # noqa: E402

MANAGER_TOKEN = "manager-token"
USER_TOKEN = "user-token"


class StubRateClient:
    """Rate client returning canned rates, or failing when ``rates`` is None."""

    def __init__(self, rates: ExchangeRates | None) -> None:
        self.rates = rates
        self.calls = 0

    def fetch_rates(self) -> ExchangeRates:
        self.calls += 1
        if self.rates is None:
            raise ExchangeRateRequestError("feed unavailable")
        return self.rates


@pytest.fixture
def sample_rates() -> ExchangeRates:
    return ExchangeRates(base="EUR", date=date(2026, 10, 19), rates={"USD": 1.1, "GBP": 0.85, "ILS": 4.0})


@pytest.fixture
def rate_client(sample_rates: ExchangeRates) -> StubRateClient:
    return StubRateClient(sample_rates)


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False, class_=Session)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+pysqlite://",
        api_tokens={MANAGER_TOKEN: "manager", USER_TOKEN: "user"},
        visitor_hash_secret="test-secret",
    )


@pytest.fixture
def app(settings: Settings, session_factory: sessionmaker, rate_client: StubRateClient) -> FastAPI:
    application = create_app(
        settings=settings,
        exchange_rates=ExchangeRateService(rate_client, RateCache(ttl_seconds=60)),
    )

    def _session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db_session] = _session_override
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide an API test client for contract suites."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def manager_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {MANAGER_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}
