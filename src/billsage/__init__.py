"""BillSage: bill calendar, goal tracking and a daily check-in assistant."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, UserSession, create_app_context

__all__ = [
    "AppContext",
    "BaseConfig",
    "DevConfig",
    "TestConfig",
    "UserSession",
    "create_app_context",
]
