"""HTTP client for the public exchange-rate feed used by the donation widget."""

from __future__ import annotations

from typing import Any

import requests
from pydantic import ValidationError

from hopebridge.schemas.currency import ExchangeRates


class ExchangeRateClientError(RuntimeError):
    """Base error raised by exchange-rate client operations."""


class ExchangeRateRequestError(ExchangeRateClientError):
    """Raised when the rate feed cannot be reached or answers with an error."""


class ExchangeRateResponseError(ExchangeRateClientError):
    """Raised when the rate feed answers with a malformed payload."""


class ExchangeRateClient:
    """Fetch the latest rates for one base currency."""

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url:
            raise ValueError("url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._url = url
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def fetch_rates(self) -> ExchangeRates:
        try:
            response = self._session.get(
                self._url,
                headers={"Accept": "application/json", "User-Agent": "hopebridge-api/0.1"},
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ExchangeRateRequestError("Exchange-rate request failed") from exc

        try:
            raw = response.json()
        except ValueError as exc:
            raise ExchangeRateResponseError("Exchange-rate payload is not JSON") from exc
        return self._normalize(raw)

    @staticmethod
    def _normalize(raw: Any) -> ExchangeRates:
        if not isinstance(raw, dict):
            raise ExchangeRateResponseError("Exchange-rate payload must be a JSON object")
        try:
            return ExchangeRates.model_validate(
                {"base": raw.get("base"), "date": raw.get("date"), "rates": raw.get("rates")},
            )
        except ValidationError as exc:
            raise ExchangeRateResponseError("Exchange-rate payload is missing base, date or rates") from exc
