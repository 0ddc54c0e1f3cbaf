"""Local reminders for unpaid bills due today, tomorrow or in three days."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Protocol

from ..logging_config import get_logger
from ..models.bill import Bill, BillStatus

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import BillRepository

logger = get_logger("services.notifications")

LOOKAHEAD_DAYS = 7
# Sparse schedule: days-until-due -> title. Other offsets stay silent.
REMINDER_TITLES = {
    0: "Bill Due Today!",
    1: "Bill Due Tomorrow",
    3: "Upcoming Bill",
}


@dataclass(frozen=True, slots=True)
class BillNotification:
    title: str
    body: str
    tag: str
    require_interaction: bool = True


class Notifier(Protocol):
    """Local notification surface."""

    def request_permission(self) -> bool:  # pragma: no cover - interface
        ...

    def show(self, notification: BillNotification) -> None:  # pragma: no cover - interface
        ...


class BaseNotifier(ABC):
    """Asks the platform for permission once and remembers the answer."""

    def __init__(self) -> None:
        self._permission: Optional[bool] = None

    def request_permission(self) -> bool:
        if self._permission is None:
            self._permission = bool(self._ask_permission())
        return self._permission

    def _ask_permission(self) -> bool:
        return True

    @abstractmethod
    def show(self, notification: BillNotification) -> None:
        ...


class LogNotifier(BaseNotifier):
    """Writes reminders to the application log (CLI and headless use)."""

    def show(self, notification: BillNotification) -> None:
        logger.info(
            "%s: %s",
            notification.title,
            notification.body,
            extra={"tag": notification.tag},
        )


def format_amount(amount: Optional[Decimal]) -> str:
    if amount is None:
        return "Amount TBD"
    return f"${Decimal(amount):.2f}"


def bill_tag(bill: Bill) -> str:
    return f"bill-{bill.id}"


def notification_for(bill: Bill, today: date) -> Optional[BillNotification]:
    """Return the reminder this bill earns today, if any."""

    if bill.status == BillStatus.PAID:
        return None
    days_until = (bill.due_date - today).days
    title = REMINDER_TITLES.get(days_until)
    if title is None:
        return None
    amount = format_amount(bill.amount)
    if days_until == 3:
        body = f"{bill.description} due in 3 days - {amount}"
    else:
        body = f"{bill.description} - {amount}"
    return BillNotification(title=title, body=body, tag=bill_tag(bill))


def check_upcoming_bills(
    bills: Iterable[Bill], notifier: Notifier, *, today: date
) -> list[BillNotification]:
    """Fire at most one notification per bill; return what was fired."""

    if not notifier.request_permission():
        logger.info("Notification permission not granted; skipping bill reminders")
        return []
    fired: list[BillNotification] = []
    for bill in bills:
        notification = notification_for(bill, today)
        if notification is None:
            continue
        notifier.show(notification)
        fired.append(notification)
    return fired


class ReminderService:
    """Fetches the next week's unpaid bills and runs the reminder check."""

    def __init__(
        self,
        bill_repo: "BillRepository",
        notifier: Notifier,
        *,
        clock: Callable[[], date] = date.today,
    ):
        self.bill_repo = bill_repo
        self.notifier = notifier
        self.clock = clock

    def upcoming_unpaid(self, session: "UserSession", today: Optional[date] = None) -> list[Bill]:
        if today is None:
            today = self.clock()
        return self.bill_repo.list_unpaid_between(
            today, today + timedelta(days=LOOKAHEAD_DAYS), user_id=session.user_id
        )

    def run(self, session: "UserSession") -> list[BillNotification]:
        today = self.clock()
        bills = self.upcoming_unpaid(session, today)
        fired = check_upcoming_bills(bills, self.notifier, today=today)
        if fired:
            logger.info(
                "Bill reminders fired",
                extra={"user_id": session.user_id, "count": len(fired)},
            )
        return fired


__all__ = [
    "BaseNotifier",
    "BillNotification",
    "LOOKAHEAD_DAYS",
    "LogNotifier",
    "Notifier",
    "REMINDER_TITLES",
    "ReminderService",
    "bill_tag",
    "check_upcoming_bills",
    "format_amount",
    "notification_for",
]
