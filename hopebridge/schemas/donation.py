"""Pydantic schemas for donation API payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from hopebridge.db.models.donation import DonationStatusEnum
from hopebridge.db.models.donation import PaymentMethodEnum
from hopebridge.schemas.pagination import Pagination
from hopebridge.schemas.user import EMAIL_PATTERN


class DonationCreate(BaseModel):
    """Donation submitted from the donation widget."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project_id: UUID
    donor_name: str | None = Field(default=None, max_length=100)
    donor_email: str | None = Field(default=None, max_length=320, pattern=EMAIL_PATTERN)
    amount: int = Field(gt=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    payment_method: PaymentMethodEnum
    transaction_id: str = Field(min_length=1, max_length=128)
    anonymous: bool = False
    message: str | None = Field(default=None, max_length=500)

    @field_validator("currency")
    @classmethod
    def _uppercase_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("donor_email")
    @classmethod
    def _lowercase_email(cls, value: str | None) -> str | None:
        return value.lower() if value is not None else None


class Donation(BaseModel):
    """Donation response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    donor_name: str | None = None
    donor_email: str | None = None
    amount: int
    currency: str
    credited_amount: int
    payment_method: PaymentMethodEnum
    transaction_id: str
    status: DonationStatusEnum
    anonymous: bool
    message: str | None = None
    created_at: datetime


class DonationPage(BaseModel):
    items: list[Donation]
    pagination: Pagination
