"""Bill CRUD scoped to one calendar date.

Every mutation is followed by a full re-read of the affected day, so callers
always render what the store holds rather than a locally patched copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Optional, Union

from ..errors import PreconditionError, RecordNotFoundError
from ..logging_config import get_logger
from ..models.bill import Bill, BillStatus, BillType

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import BillRepository

logger = get_logger("services.day_detail")

AmountInput = Union[Decimal, float, int, str, None]


@dataclass(slots=True)
class DayDetail:
    """The bills of one day plus the header totals."""

    day: date
    bills: list[Bill]

    @property
    def total_bills(self) -> Decimal:
        return _sum_amounts(b for b in self.bills if b.type == BillType.BILL)

    @property
    def total_income(self) -> Decimal:
        return _sum_amounts(b for b in self.bills if b.type == BillType.INCOME)


def _sum_amounts(bills) -> Decimal:
    return sum((Decimal(b.amount) for b in bills if b.amount is not None), Decimal("0"))


def parse_amount(raw: AmountInput) -> Optional[Decimal]:
    """Return a two-place Decimal, or None for a blank/absent amount."""

    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "").lstrip("$")
        if not raw:
            return None
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise PreconditionError(f"Invalid amount: {raw!r}") from exc
    if not value.is_finite():
        raise PreconditionError(f"Invalid amount: {raw!r}")
    return value.quantize(Decimal("0.01"))


def parse_bill_type(raw: Union[str, BillType]) -> BillType:
    try:
        return BillType(raw)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in BillType)
        raise PreconditionError(f"Bill type must be one of: {allowed}") from exc


def parse_bill_status(raw: Union[str, BillStatus]) -> BillStatus:
    try:
        return BillStatus(raw)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in BillStatus)
        raise PreconditionError(f"Bill status must be one of: {allowed}") from exc


class DayDetailEditor:
    """Add, re-status and delete the bills of a day."""

    def __init__(self, bill_repo: "BillRepository"):
        self.bill_repo = bill_repo

    def load_day(self, session: "UserSession", day: date) -> DayDetail:
        return DayDetail(day=day, bills=self.bill_repo.list_for_day(day, user_id=session.user_id))

    def add_item(
        self,
        session: "UserSession",
        day: date,
        description: str,
        amount: AmountInput = None,
        type: Union[str, BillType] = BillType.BILL,
        note: Optional[str] = None,
    ) -> DayDetail:
        """Create an unpaid bill on ``day`` and return the reloaded day."""

        description = (description or "").strip()
        if not description:
            raise PreconditionError("Description is required")
        bill = Bill(
            user_id=session.user_id,
            due_date=day,
            description=description,
            amount=parse_amount(amount),
            type=parse_bill_type(type).value,
            status=BillStatus.UNPAID.value,
            note=(note or "").strip() or None,
        )
        created = self.bill_repo.create(bill, user_id=session.user_id)
        logger.info("Bill created", extra={"bill_id": created.id, "due_date": day.isoformat()})
        return self.load_day(session, day)

    def toggle_paid(self, session: "UserSession", bill_id: int) -> DayDetail:
        """Flip paid and unpaid; any other status becomes paid."""

        bill = self._require(session, bill_id)
        target = BillStatus.UNPAID if bill.status == BillStatus.PAID else BillStatus.PAID
        return self._write_status(session, bill, target)

    def set_status(
        self,
        session: "UserSession",
        bill_id: int,
        status: Union[str, BillStatus],
        pa_date: Optional[date] = None,
    ) -> DayDetail:
        """Set an explicit status; payment_arrangement requires ``pa_date``."""

        target = parse_bill_status(status)
        if target == BillStatus.PAYMENT_ARRANGEMENT and pa_date is None:
            raise PreconditionError("A payment arrangement needs a payment arrangement date")
        bill = self._require(session, bill_id)
        if pa_date is not None and target == BillStatus.PAYMENT_ARRANGEMENT:
            bill.pa_date = pa_date
        return self._write_status(session, bill, target)

    def set_payment_arrangement_date(
        self, session: "UserSession", bill_id: int, pa_date: date
    ) -> DayDetail:
        """Record a PA date; the status becomes payment_arrangement whatever it was."""

        if pa_date is None:
            raise PreconditionError("A payment arrangement date is required")
        bill = self._require(session, bill_id)
        bill.pa_date = pa_date
        return self._write_status(session, bill, BillStatus.PAYMENT_ARRANGEMENT)

    def delete_item(self, session: "UserSession", bill_id: int) -> DayDetail:
        """Delete the bill outright and return its reloaded day."""

        bill = self._require(session, bill_id)
        self.bill_repo.delete(bill_id, user_id=session.user_id)
        logger.info("Bill deleted", extra={"bill_id": bill_id})
        return self.load_day(session, bill.due_date)

    def _require(self, session: "UserSession", bill_id: int) -> Bill:
        bill = self.bill_repo.get_by_id(bill_id, user_id=session.user_id)
        if bill is None:
            raise RecordNotFoundError(f"Bill {bill_id} not found")
        return bill

    def _write_status(self, session: "UserSession", bill: Bill, status: BillStatus) -> DayDetail:
        bill.status = status.value
        bill.updated_at = datetime.now(timezone.utc)
        self.bill_repo.update(bill, user_id=session.user_id)
        logger.info("Bill status updated", extra={"bill_id": bill.id, "status": status.value})
        return self.load_day(session, bill.due_date)


__all__ = [
    "DayDetail",
    "DayDetailEditor",
    "parse_amount",
    "parse_bill_status",
    "parse_bill_type",
]
