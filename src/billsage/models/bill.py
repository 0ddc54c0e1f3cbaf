"""Dated bills, income entries and reminders shown on the calendar."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class BillType(str, Enum):
    BILL = "bill"
    INCOME = "income"
    REMINDER = "reminder"


class BillStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    PAYMENT_ARRANGEMENT = "payment_arrangement"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Bill(SQLModel, table=True):
    """A dated obligation, income entry or reminder owned by one user.

    ``amount`` is optional; ``None`` means the amount is not known yet and is
    counted as zero in every total. A ``payment_arrangement`` status always
    carries ``pa_date``.
    """

    __tablename__: ClassVar[str] = "bill"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    due_date: date = Field(nullable=False, index=True)
    description: str = Field(nullable=False, max_length=255)
    amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    type: str = Field(default=BillType.BILL.value, nullable=False, max_length=16)
    status: str = Field(default=BillStatus.UNPAID.value, nullable=False, max_length=32, index=True)
    note: Optional[str] = Field(default=None, max_length=500)
    pa_date: Optional[date] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
