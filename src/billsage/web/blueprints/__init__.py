"""Blueprint exports."""

from . import assistant, auth, calendar, goals

__all__ = ["assistant", "auth", "calendar", "goals"]
