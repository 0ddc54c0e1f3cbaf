"""SQLModel table exports."""

from .bill import Bill, BillStatus, BillType
from .chat import ChatMessage, ChatRole
from .checkin import DailyCheckIn
from .goal import Goal, GoalPriority, GoalStatus
from .user import User

__all__ = [
    "Bill",
    "BillStatus",
    "BillType",
    "ChatMessage",
    "ChatRole",
    "DailyCheckIn",
    "Goal",
    "GoalPriority",
    "GoalStatus",
    "User",
]
