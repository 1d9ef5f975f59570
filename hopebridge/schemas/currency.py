"""Pydantic schemas for the donation currency widget."""

from __future__ import annotations

import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class ExchangeRates(BaseModel):
    """Rates relative to ``base`` as published on ``date``."""

    base: str
    date: datetime.date
    rates: dict[str, float]


class ConversionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    amount: float = Field(gt=0)
    from_currency: str = Field(alias="fromCurrency", min_length=3, max_length=3)
    to_currency: str = Field(alias="toCurrency", min_length=3, max_length=3)

    @field_validator("from_currency", "to_currency")
    @classmethod
    def _uppercase(cls, value: str) -> str:
        return value.upper()


class ConversionResult(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    converted_amount: float
    exchange_rate: float
    date: datetime.date
