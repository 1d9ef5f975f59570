"""Unit tests for the exchange-rate client, cache and conversion service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

import pytest
import requests

from hopebridge.core.errors import ErrorCode
from hopebridge.core.errors import MissingParameterError
from hopebridge.integrations.exchange_rates import ExchangeRateClient
from hopebridge.integrations.exchange_rates import ExchangeRateRequestError
from hopebridge.integrations.exchange_rates import ExchangeRateResponseError
from hopebridge.schemas.currency import ConversionRequest
from hopebridge.schemas.currency import ExchangeRates
from hopebridge.services.currency import FALLBACK_RATES
from hopebridge.services.currency import ExchangeRateService
from hopebridge.services.currency import RateCache

FEED_URL = "https://rates.example.com/latest/EUR"


@dataclass
class _FakeResponse:
    status_code: int
    body: Any

    def json(self) -> Any:
        if isinstance(self.body, Exception):
            raise self.body
        return self.body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            response = requests.Response()
            response.status_code = self.status_code
            raise requests.HTTPError(response=response)


class _SessionStub:
    def __init__(self, request_fn: Callable[..., _FakeResponse]) -> None:
        self._request_fn = request_fn
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, *, headers: dict[str, str], timeout: float):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        return self._request_fn(url=url, headers=headers, timeout=timeout)


class StubRateClient:
    def __init__(self, rates: ExchangeRates | None) -> None:
        self.rates = rates
        self.calls = 0

    def fetch_rates(self) -> ExchangeRates:
        self.calls += 1
        if self.rates is None:
            raise ExchangeRateRequestError("feed unavailable")
        return self.rates


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _client(response: _FakeResponse) -> tuple[ExchangeRateClient, _SessionStub]:
    session = _SessionStub(lambda **_: response)
    return ExchangeRateClient(url=FEED_URL, timeout_seconds=3.0, session=session), session  # type: ignore[arg-type]


def test_fetch_rates_normalizes_the_feed_payload() -> None:
    client, session = _client(
        _FakeResponse(200, {"base": "EUR", "date": "2026-10-19", "rates": {"USD": 1.1}, "time_last_updated": 1}),
    )

    rates = client.fetch_rates()

    assert rates == ExchangeRates(base="EUR", date=date(2026, 10, 19), rates={"USD": 1.1})
    assert session.calls[0]["url"] == FEED_URL
    assert session.calls[0]["timeout"] == 3.0
    assert session.calls[0]["headers"]["Accept"] == "application/json"


def test_fetch_rates_wraps_http_errors() -> None:
    client, _ = _client(_FakeResponse(503, {}))

    with pytest.raises(ExchangeRateRequestError):
        client.fetch_rates()


def test_fetch_rates_rejects_malformed_payloads() -> None:
    not_json, _ = _client(_FakeResponse(200, ValueError("bad json")))
    not_object, _ = _client(_FakeResponse(200, ["EUR"]))
    missing_rates, _ = _client(_FakeResponse(200, {"base": "EUR", "date": "2026-10-19"}))

    for client in (not_json, not_object, missing_rates):
        with pytest.raises(ExchangeRateResponseError):
            client.fetch_rates()


def test_client_rejects_invalid_configuration() -> None:
    with pytest.raises(ValueError):
        ExchangeRateClient(url="")
    with pytest.raises(ValueError):
        ExchangeRateClient(url=FEED_URL, timeout_seconds=0)


def test_rate_cache_expires_after_ttl(sample_rates: ExchangeRates) -> None:
    clock = _Clock()
    cache = RateCache(ttl_seconds=60, clock=clock)

    assert cache.get() is None
    cache.put(sample_rates)
    assert cache.get() is sample_rates

    clock.now += 61
    assert cache.get() is None
    assert cache.last() is sample_rates


def test_rate_cache_requires_positive_ttl() -> None:
    with pytest.raises(ValueError):
        RateCache(ttl_seconds=0)


def test_service_serves_fresh_cache_without_refetching(sample_rates: ExchangeRates) -> None:
    client = StubRateClient(sample_rates)
    service = ExchangeRateService(client, RateCache(ttl_seconds=60))  # type: ignore[arg-type]

    assert service.get_rates() == sample_rates
    assert service.get_rates() == sample_rates
    assert client.calls == 1


def test_service_falls_back_to_last_known_rates(sample_rates: ExchangeRates) -> None:
    clock = _Clock()
    client = StubRateClient(sample_rates)
    service = ExchangeRateService(client, RateCache(ttl_seconds=60, clock=clock))  # type: ignore[arg-type]
    service.get_rates()

    client.rates = None
    clock.now += 120

    assert service.get_rates() == sample_rates
    assert client.calls == 2


def test_service_serves_static_table_when_nothing_is_cached() -> None:
    service = ExchangeRateService(StubRateClient(None), RateCache(ttl_seconds=60))  # type: ignore[arg-type]

    rates = service.get_rates()

    assert rates.base == "EUR"
    assert rates.rates == FALLBACK_RATES


def test_convert_uses_cross_rates(sample_rates: ExchangeRates) -> None:
    service = ExchangeRateService(StubRateClient(sample_rates), RateCache(ttl_seconds=60))  # type: ignore[arg-type]

    result = service.convert(ConversionRequest(amount=100, fromCurrency="usd", toCurrency="GBP"))

    assert result.from_currency == "USD"
    assert result.to_currency == "GBP"
    assert result.exchange_rate == pytest.approx(0.85 / 1.1)
    assert result.converted_amount == pytest.approx(77.27)

    from_base = service.convert(ConversionRequest(amount=10, fromCurrency="EUR", toCurrency="ILS"))
    assert from_base.converted_amount == pytest.approx(40.0)


def test_convert_rejects_unsupported_currency(sample_rates: ExchangeRates) -> None:
    service = ExchangeRateService(StubRateClient(sample_rates), RateCache(ttl_seconds=60))  # type: ignore[arg-type]

    with pytest.raises(MissingParameterError) as excinfo:
        service.convert(ConversionRequest(amount=1, fromCurrency="EUR", toCurrency="XYZ"))

    assert excinfo.value.code is ErrorCode.MISSING_PARAMETER
    assert excinfo.value.details == {"currency": "XYZ"}
