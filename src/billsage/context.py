"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelBillRepository,
    SQLModelChatRepository,
    SQLModelCheckInRepository,
    SQLModelGoalRepository,
)
from .models.user import User

if TYPE_CHECKING:  # pragma: no cover
    from .services.assistant import AssistantGateway, GenerativeClient
    from .services.calendar import CalendarService
    from .services.chat import ChatService
    from .services.day_detail import DayDetailEditor
    from .services.goals import GoalTracker
    from .services.notifications import Notifier, ReminderService


@dataclass(frozen=True, slots=True)
class UserSession:
    """The authenticated user an operation runs on behalf of.

    Passed explicitly to every service call; services never look up the
    current user on their own.
    """

    user_id: int
    username: str

    @classmethod
    def for_user(cls, user: User) -> "UserSession":
        if user.id is None:
            raise ValueError("User must be persisted before opening a session")
        return cls(user_id=user.id, username=user.username)


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    config: BaseConfig
    session_factory: SessionFactory

    bill_repo: SQLModelBillRepository
    goal_repo: SQLModelGoalRepository
    chat_repo: SQLModelChatRepository
    checkin_repo: SQLModelCheckInRepository

    calendar: "CalendarService"
    day_detail: "DayDetailEditor"
    goals: "GoalTracker"
    assistant: "AssistantGateway"
    chat: "ChatService"
    reminders: "ReminderService"

    clock: Callable[[], date] = date.today


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    generative_client: Optional["GenerativeClient"] = None,
    notifier: Optional["Notifier"] = None,
    clock: Callable[[], date] = date.today,
) -> AppContext:
    """Create the database, repositories and services for one process."""

    from .services.assistant import AssistantGateway, OpenAICompatibleClient
    from .services.calendar import CalendarService
    from .services.chat import ChatService
    from .services.checkin import CheckInContextBuilder
    from .services.day_detail import DayDetailEditor
    from .services.goals import GoalTracker
    from .services.notifications import LogNotifier, ReminderService

    if config is None:
        config = BaseConfig()

    _, session_factory = bootstrap_database(config)

    bill_repo = SQLModelBillRepository(session_factory)
    goal_repo = SQLModelGoalRepository(session_factory)
    chat_repo = SQLModelChatRepository(session_factory)
    checkin_repo = SQLModelCheckInRepository(session_factory)

    if generative_client is None:
        generative_client = OpenAICompatibleClient.from_config(config)

    builder = CheckInContextBuilder(
        bill_repo=bill_repo,
        goal_repo=goal_repo,
        chat_repo=chat_repo,
        checkin_repo=checkin_repo,
        history_fetch_limit=config.CHAT_HISTORY_FETCH_LIMIT,
        history_window=config.CHAT_CONTEXT_WINDOW,
        upcoming_bills_limit=config.UPCOMING_BILLS_LIMIT,
        active_goals_limit=config.ACTIVE_GOALS_LIMIT,
    )
    assistant = AssistantGateway(builder=builder, client=generative_client, clock=clock)

    return AppContext(
        config=config,
        session_factory=session_factory,
        bill_repo=bill_repo,
        goal_repo=goal_repo,
        chat_repo=chat_repo,
        checkin_repo=checkin_repo,
        calendar=CalendarService(bill_repo),
        day_detail=DayDetailEditor(bill_repo),
        goals=GoalTracker(goal_repo),
        assistant=assistant,
        chat=ChatService(chat_repo=chat_repo, gateway=assistant, view_limit=config.CHAT_VIEW_LIMIT),
        reminders=ReminderService(bill_repo, notifier or LogNotifier(), clock=clock),
        clock=clock,
    )
