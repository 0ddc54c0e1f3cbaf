"""Financial goals tracked alongside the calendar."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum, IntEnum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    # Stored value only; no operation transitions a goal into it.
    PAUSED = "paused"


class GoalPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Goal(SQLModel, table=True):
    """A user-defined financial target."""

    __tablename__: ClassVar[str] = "goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    goal: str = Field(nullable=False, max_length=255)
    target_amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    target_date: Optional[date] = Field(default=None)
    priority: int = Field(default=GoalPriority.LOW.value, nullable=False, ge=1, le=3)
    status: str = Field(default=GoalStatus.ACTIVE.value, nullable=False, max_length=16, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )
