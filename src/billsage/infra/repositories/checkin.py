"""SQLModel implementation of the daily check-in repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import select

from ...models.checkin import DailyCheckIn
from ..database import SessionFactory


class SQLModelCheckInRepository:
    """SQLModel-based check-in repository keyed by (user, day)."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_for_day(self, day: date, *, user_id: int) -> Optional[DailyCheckIn]:
        """Return the check-in for ``day`` if one exists."""
        with self.session_factory() as session:
            obj = session.exec(
                select(DailyCheckIn)
                .where(DailyCheckIn.user_id == user_id)
                .where(DailyCheckIn.check_in_date == day)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def upsert(self, check_in: DailyCheckIn, *, user_id: int) -> DailyCheckIn:
        """Insert or overwrite the row for (user, check_in.check_in_date)."""
        with self.session_factory() as session:
            existing = session.exec(
                select(DailyCheckIn)
                .where(DailyCheckIn.user_id == user_id)
                .where(DailyCheckIn.check_in_date == check_in.check_in_date)
            ).first()

            if existing:
                existing.goals_discussed = check_in.goals_discussed
                existing.progress_notes = check_in.progress_notes
                existing.updated_at = check_in.updated_at
                target = existing
            else:
                check_in.user_id = user_id
                target = check_in

            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)
            return target
