"""Concrete repository implementations using SQLModel."""

from .bill import SQLModelBillRepository
from .chat import SQLModelChatRepository
from .checkin import SQLModelCheckInRepository
from .goal import SQLModelGoalRepository

__all__ = [
    "SQLModelBillRepository",
    "SQLModelChatRepository",
    "SQLModelCheckInRepository",
    "SQLModelGoalRepository",
]
