"""Pytest configuration and shared fixtures for BillSage tests.

Each test gets its own SQLite file under ``tmp_path``, a fixed clock, a fake
generative client and a notifier that records what it was asked to show.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional, Sequence

import pytest

from billsage.config import TestConfig
from billsage.context import UserSession, create_app_context
from billsage.errors import AssistantError
from billsage.models import Bill, BillStatus, BillType, ChatMessage, ChatRole, Goal, GoalStatus
from billsage.services import auth
from billsage.services.notifications import BaseNotifier, BillNotification

# Wednesday; October 2025 starts on a Wednesday as well.
TODAY = date(2025, 10, 15)


class FakeGenerativeClient:
    """Returns a canned reply (or raises) and keeps every prompt it was sent."""

    def __init__(self, reply: str = "Sounds good! Keep it up.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: list[list] = []

    def complete(self, messages: Sequence) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_prompt(self):
        return self.calls[-1]


class RecordingNotifier(BaseNotifier):
    def __init__(self, granted: bool = True):
        super().__init__()
        self.granted = granted
        self.permission_requests = 0
        self.shown: list[BillNotification] = []

    def _ask_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    def show(self, notification: BillNotification) -> None:
        self.shown.append(notification)


# =============================================================================
# Environment and application fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the developer's environment and data directory."""

    monkeypatch.setenv("BILLSAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("BILLSAGE_DEV_MODE", "true")
    monkeypatch.delenv("BILLSAGE_DATABASE_URL", raising=False)
    monkeypatch.delenv("BILLSAGE_SECRET_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("BILLSAGE_REMINDER_INTERVAL_MINUTES", "0")


@pytest.fixture
def config(tmp_path):
    return TestConfig(database_url=f"sqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
def fake_client():
    return FakeGenerativeClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def ctx(config, fake_client, notifier):
    """Application context wired to the fakes and a fixed clock."""

    return create_app_context(
        config,
        generative_client=fake_client,
        notifier=notifier,
        clock=lambda: TODAY,
    )


@pytest.fixture
def session_factory(ctx):
    return ctx.session_factory


@pytest.fixture
def user(session_factory):
    return auth.create_user(username="tester", password="s3cret-pass", session_factory=session_factory)


@pytest.fixture
def user_session(user) -> UserSession:
    return UserSession.for_user(user)


@pytest.fixture
def other_session(session_factory) -> UserSession:
    other = auth.create_user(username="someone-else", password="pw", session_factory=session_factory)
    return UserSession.for_user(other)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def bill_factory(ctx, user):
    """Persist bills directly through the repository.

    Returns:
        Callable: Function that creates and persists Bill instances
    """

    def _create_bill(
        due_date: date = TODAY,
        description: str = "Electric",
        amount: Optional[str] = "50.00",
        type: BillType = BillType.BILL,
        status: BillStatus = BillStatus.UNPAID,
        pa_date: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Bill:
        owner = user_id or user.id
        bill = Bill(
            user_id=owner,
            due_date=due_date,
            description=description,
            amount=None if amount is None else Decimal(amount),
            type=type.value,
            status=status.value,
            pa_date=pa_date,
        )
        return ctx.bill_repo.create(bill, user_id=owner)

    return _create_bill


@pytest.fixture
def goal_factory(ctx, user):
    """Factory for goals; ``created_at`` can be pinned to control ordering."""

    def _create_goal(
        text: str = "Save $500",
        priority: int = 1,
        status: GoalStatus = GoalStatus.ACTIVE,
        created_at: Optional[datetime] = None,
    ) -> Goal:
        goal = Goal(
            user_id=user.id,
            goal=text,
            priority=priority,
            status=status.value,
            created_at=created_at or datetime.now(timezone.utc),
        )
        return ctx.goal_repo.create(goal, user_id=user.id)

    return _create_goal


@pytest.fixture
def message_factory(ctx, user):
    """Append chat messages one second apart so their order is unambiguous."""

    start = datetime(2025, 10, 1, 9, 0, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _create_message(text: str, role: ChatRole = ChatRole.USER) -> ChatMessage:
        created_at = start + timedelta(seconds=counter["n"])
        counter["n"] += 1
        message = ChatMessage(user_id=user.id, message=text, role=role.value, created_at=created_at)
        return ctx.chat_repo.append(message, user_id=user.id)

    return _create_message


@pytest.fixture
def failing_client():
    return FakeGenerativeClient(error=AssistantError("quota exceeded"))
