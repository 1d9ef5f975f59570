"""SQLAlchemy model for donations made to projects."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean
from sqlalchemy import CheckConstraint
from sqlalchemy import DateTime
from sqlalchemy import ForeignKey
from sqlalchemy import Index
from sqlalchemy import Integer
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import UniqueConstraint
from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from hopebridge.db.models.project import Base
from hopebridge.db.models.project import utcnow


class DonationStatusEnum(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethodEnum(str, Enum):
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    PAYPAL = "paypal"
    CRYPTO = "crypto"


class Donation(Base):
    """One donation; ``credited_amount`` is the amount in the project's currency."""

    __tablename__ = "donations"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_donations"),
        UniqueConstraint("transaction_id", name="uq_donations_transaction_id"),
        CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
        CheckConstraint("credited_amount >= 0", name="ck_donations_credited_amount_non_negative"),
        CheckConstraint(
            "status IN ('pending', 'completed', 'failed', 'refunded')",
            name="ck_donations_status",
        ),
        CheckConstraint(
            "payment_method IN ('credit_card', 'bank_transfer', 'paypal', 'crypto')",
            name="ck_donations_payment_method",
        ),
        Index("ix_donations_project_id_created_at", "project_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", name="fk_donations_project_id_projects", ondelete="CASCADE"),
        nullable=False,
    )
    donor_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    donor_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    credited_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(16), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=DonationStatusEnum.PENDING.value)
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    message: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
