"""Bill repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.bill import Bill


class BillRepository(Protocol):
    """Repository for managing bill records of one user at a time."""

    def get_by_id(self, bill_id: int, *, user_id: int) -> Optional[Bill]:
        """Retrieve a bill by ID."""
        ...

    def list_between(self, start: date, end: date, *, user_id: int) -> list[Bill]:
        """List bills dated within [start, end], ordered by date."""
        ...

    def list_for_day(self, day: date, *, user_id: int) -> list[Bill]:
        """List the bills on a single calendar day."""
        ...

    def list_upcoming(self, since: date, *, user_id: int, limit: int) -> list[Bill]:
        """List up to ``limit`` bills dated on or after ``since``."""
        ...

    def list_unpaid_between(self, start: date, end: date, *, user_id: int) -> list[Bill]:
        """List bills within [start, end] whose status is not paid."""
        ...

    def create(self, bill: Bill, *, user_id: int) -> Bill:
        """Create a new bill."""
        ...

    def update(self, bill: Bill, *, user_id: int) -> Bill:
        """Update an existing bill."""
        ...

    def delete(self, bill_id: int, *, user_id: int) -> bool:
        """Delete a bill; return False when nothing matched."""
        ...
