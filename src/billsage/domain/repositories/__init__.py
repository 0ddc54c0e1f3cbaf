"""Repository protocol definitions for domain layer."""

from .bill import BillRepository
from .chat import ChatRepository
from .checkin import CheckInRepository
from .goal import GoalRepository

__all__ = [
    "BillRepository",
    "ChatRepository",
    "CheckInRepository",
    "GoalRepository",
]
