"""Month grid and per-day bill status aggregation."""

from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ..errors import PreconditionError
from ..models.bill import Bill, BillStatus

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import BillRepository

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True, slots=True)
class DaySummary:
    """Compact status of one calendar day."""

    day: date
    all_paid: bool
    has_payment_arrangement: bool
    item_count: int
    total_amount: Decimal

    @property
    def show_paid_badge(self) -> bool:
        return self.all_paid

    @property
    def show_payment_arrangement_marker(self) -> bool:
        # All-paid wins when both would apply.
        return self.has_payment_arrangement and not self.all_paid


@dataclass(slots=True)
class MonthView:
    """Days of one month plus the blank cells that align day 1 to its weekday."""

    year: int
    month: int
    leading_blanks: int
    days: list[DaySummary] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def weekday_names(self) -> tuple[str, ...]:
        return WEEKDAY_NAMES

    def cells(self) -> list[Optional[DaySummary]]:
        """Grid cells in display order; ``None`` marks a leading blank."""
        return [None] * self.leading_blanks + list(self.days)

    def summary_for(self, day: date) -> DaySummary:
        return self.days[day.day - 1]


def _check_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise PreconditionError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise PreconditionError(f"Year out of range: {year}")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the inclusive first and last day of the month."""

    _check_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def leading_blank_count(year: int, month: int) -> int:
    """Weekday index of the 1st with Sunday as 0."""

    _check_month(year, month)
    return (date(year, month, 1).weekday() + 1) % 7


def previous_month(year: int, month: int) -> tuple[int, int]:
    _check_month(year, month)
    return (year - 1, 12) if month == 1 else (year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    _check_month(year, month)
    return (year + 1, 1) if month == 12 else (year, month + 1)


def summarize_day(day: date, bills: Iterable[Bill]) -> DaySummary:
    """Classify the bills of one day; absent amounts count as zero."""

    day_bills = list(bills)
    statuses = [bill.status for bill in day_bills]
    total = sum((Decimal(bill.amount) for bill in day_bills if bill.amount is not None), Decimal("0"))
    return DaySummary(
        day=day,
        all_paid=bool(day_bills) and all(status == BillStatus.PAID for status in statuses),
        has_payment_arrangement=any(status == BillStatus.PAYMENT_ARRANGEMENT for status in statuses),
        item_count=len(day_bills),
        total_amount=total,
    )


def build_month_view(year: int, month: int, bills: Iterable[Bill]) -> MonthView:
    """Aggregate the month's bills into one summary per calendar day.

    Bills dated outside the month are ignored.
    """

    first, last = month_bounds(year, month)
    by_day: dict[date, list[Bill]] = defaultdict(list)
    for bill in bills:
        if first <= bill.due_date <= last:
            by_day[bill.due_date].append(bill)

    days = [
        summarize_day(date(year, month, number), by_day.get(date(year, month, number), ()))
        for number in range(1, last.day + 1)
    ]
    return MonthView(
        year=year,
        month=month,
        leading_blanks=leading_blank_count(year, month),
        days=days,
    )


class CalendarService:
    """Loads a whole month from the store on every navigation."""

    def __init__(self, bill_repo: "BillRepository"):
        self.bill_repo = bill_repo

    def load_month(self, session: "UserSession", year: int, month: int) -> MonthView:
        first, last = month_bounds(year, month)
        bills = self.bill_repo.list_between(first, last, user_id=session.user_id)
        return build_month_view(year, month, bills)


__all__ = [
    "CalendarService",
    "DaySummary",
    "MonthView",
    "WEEKDAY_NAMES",
    "build_month_view",
    "leading_blank_count",
    "month_bounds",
    "next_month",
    "previous_month",
    "summarize_day",
]
