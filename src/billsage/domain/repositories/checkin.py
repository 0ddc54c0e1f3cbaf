"""Daily check-in repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.checkin import DailyCheckIn


class CheckInRepository(Protocol):
    """Repository keyed by (user, day)."""

    def get_for_day(self, day: date, *, user_id: int) -> Optional[DailyCheckIn]:
        """Return the check-in for ``day`` if one exists."""
        ...

    def upsert(self, check_in: DailyCheckIn, *, user_id: int) -> DailyCheckIn:
        """Insert or overwrite the row for (user, check_in.check_in_date)."""
        ...
