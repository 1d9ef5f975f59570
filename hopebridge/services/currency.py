"""Exchange-rate lookup and currency conversion for donations."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
import logging
import time

from hopebridge.core.errors import MissingParameterError
from hopebridge.integrations.exchange_rates import ExchangeRateClient
from hopebridge.integrations.exchange_rates import ExchangeRateClientError
from hopebridge.schemas.currency import ConversionRequest
from hopebridge.schemas.currency import ConversionResult
from hopebridge.schemas.currency import ExchangeRates

logger = logging.getLogger(__name__)

FALLBACK_RATES = {
    "USD": 1.08,
    "GBP": 0.86,
    "EUR": 1.0,
    "JPY": 160.5,
    "CHF": 0.94,
    "CAD": 1.47,
    "AUD": 1.65,
    "CNY": 7.85,
    "ILS": 3.95,
    "SAR": 4.05,
    "AED": 3.97,
}


def fallback_rates(today: date | None = None) -> ExchangeRates:
    """Static EUR-based rates served when the feed is unavailable."""
    return ExchangeRates(base="EUR", date=today or date.today(), rates=dict(FALLBACK_RATES))


class RateCache:
    """Single-entry TTL cache owned by whoever constructs it."""

    def __init__(self, *, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._rates: ExchangeRates | None = None
        self._stored_at = 0.0

    def get(self) -> ExchangeRates | None:
        """Return cached rates while they are fresh."""
        if self._rates is None or self._clock() - self._stored_at > self._ttl_seconds:
            return None
        return self._rates

    def last(self) -> ExchangeRates | None:
        """Return the last stored rates regardless of age."""
        return self._rates

    def put(self, rates: ExchangeRates) -> None:
        self._rates = rates
        self._stored_at = self._clock()


class ExchangeRateService:
    """Serve cached rates and convert amounts between currencies."""

    def __init__(self, client: ExchangeRateClient, cache: RateCache) -> None:
        self._client = client
        self._cache = cache

    def get_rates(self) -> ExchangeRates:
        cached = self._cache.get()
        if cached is not None:
            return cached

        try:
            rates = self._client.fetch_rates()
        except ExchangeRateClientError:
            logger.warning("Exchange-rate fetch failed; serving last known or fallback rates", exc_info=True)
            rates = self._cache.last() or fallback_rates()
        self._cache.put(rates)
        return rates

    def convert(self, request: ConversionRequest) -> ConversionResult:
        rates = self.get_rates()
        source = _rate_for(rates, request.from_currency)
        target = _rate_for(rates, request.to_currency)
        exchange_rate = target / source
        return ConversionResult(
            amount=request.amount,
            from_currency=request.from_currency,
            to_currency=request.to_currency,
            converted_amount=round(request.amount * exchange_rate, 2),
            exchange_rate=exchange_rate,
            date=rates.date,
        )


def _rate_for(rates: ExchangeRates, currency: str) -> float:
    if currency == rates.base:
        return 1.0
    rate = rates.rates.get(currency)
    if not rate:
        raise MissingParameterError(
            message=f"Unsupported currency: {currency}",
            details={"currency": currency},
        )
    return rate
