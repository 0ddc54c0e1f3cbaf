"""Per-day record of whether goals came up in conversation."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class DailyCheckIn(SQLModel, table=True):
    """At most one row per (user, day); progress notes accumulate with ``" | "``."""

    __tablename__: ClassVar[str] = "daily_check_in"
    __table_args__ = (UniqueConstraint("user_id", "check_in_date", name="uq_check_in_user_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    check_in_date: date = Field(nullable=False, index=True)
    goals_discussed: bool = Field(default=False, nullable=False)
    progress_notes: str = Field(default="", nullable=False)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )
