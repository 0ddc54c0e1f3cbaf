"""Service module exports."""

from . import assistant, auth, calendar, chat, checkin, day_detail, goals, notifications

__all__ = [
    "assistant",
    "auth",
    "calendar",
    "chat",
    "checkin",
    "day_detail",
    "goals",
    "notifications",
]
