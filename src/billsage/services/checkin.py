"""Daily check-in context assembly and goal-discussion tracking.

For each inbound chat message the assistant sees a fixed persona prompt, a
short summary of upcoming bills and active goals, the tail of the
conversation and the new message. After the reply comes back, a keyword
scan over message and reply decides whether today's check-in row should be
marked as "goals discussed" and the message appended to its notes.

The keyword scan is plain case-insensitive substring matching over a fixed
list. "I haven't made progress" matches "progress"; that is the expected
behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ..logging_config import get_logger
from ..models.bill import Bill
from ..models.chat import ChatMessage, ChatRole
from ..models.checkin import DailyCheckIn
from ..models.goal import Goal

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import (
        BillRepository,
        ChatRepository,
        CheckInRepository,
        GoalRepository,
    )

logger = get_logger("services.checkin")

SYSTEM_PROMPT = """You are a personal financial assistant helping users manage their bills, track expenses, and achieve their financial goals.

Your role is to:
1. Conduct daily check-ins with the user about their financial situation
2. ALWAYS ask about their goals and track daily progress towards them
3. Ask about their to-do lists and how they're managing their time
4. Discuss their income and expenses
5. Help them set and achieve financial goals
6. Provide personalized guidance on prioritizing time and money
7. Be supportive, encouraging, and non-judgmental
8. Offer practical, actionable advice

IMPORTANT - Daily Goal Check-Ins:
- At the start of each conversation, ask about their goals for the day
- Check progress on their active financial goals
- Ask specific questions like: "How are you doing with [goal name]?" or "Did you make progress on [goal] today?"
- Celebrate small wins and progress
- If they haven't made progress, help them identify what blocked them and how to overcome it
- Always end conversations by setting expectations for tomorrow

Remember:
- Be conversational and friendly
- Ask follow-up questions to understand their situation better
- Help them see connections between their daily choices and long-term goals
- Celebrate their wins, no matter how small
- Be patient and understanding about setbacks
- Keep responses concise and focused (2-4 sentences usually)
- Use empathy and encouragement"""

GOAL_KEYWORDS = ("goal", "progress", "working on", "achieved", "trying to")
NOTES_SEPARATOR = " | "


@dataclass(frozen=True, slots=True)
class PromptMessage:
    """One role-tagged entry of the outbound message list."""

    role: str
    content: str

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(slots=True)
class CheckInSnapshot:
    """Everything read from the store for one assistant invocation."""

    day: date
    history: list[ChatMessage] = field(default_factory=list)
    upcoming_bills: list[Bill] = field(default_factory=list)
    active_goals: list[Goal] = field(default_factory=list)
    check_in: Optional[DailyCheckIn] = None

    @property
    def goals_discussed(self) -> bool:
        return bool(self.check_in and self.check_in.goals_discussed)

    @property
    def previous_notes(self) -> str:
        return (self.check_in.progress_notes if self.check_in else "") or ""


def _goal_names(goals: Iterable[Goal]) -> str:
    return ", ".join(g.goal for g in goals)


def build_context(
    upcoming_bills: Sequence[Bill],
    active_goals: Sequence[Goal],
    check_in: Optional[DailyCheckIn],
) -> str:
    """Return the context block appended to the system prompt."""

    context = (
        "\n\nUser Context:\n"
        f"- Upcoming Bills: {len(upcoming_bills)} bills\n"
        f"- Active Goals: {len(active_goals)} goals\n"
    )
    if active_goals:
        context += f"- Goals: {_goal_names(active_goals)}"

    discussed = bool(check_in and check_in.goals_discussed)
    notes = (check_in.progress_notes if check_in else "") or ""
    if not discussed and active_goals:
        context += (
            "\n\nIMPORTANT: You have NOT discussed goals with the user today yet. "
            f"Please ask about their progress on: {_goal_names(active_goals)}"
        )
    elif discussed and notes:
        context += f"\n\nGoals discussed today. Previous notes: {notes}"
    return context


def compose_messages(
    context: str,
    history: Sequence[ChatMessage],
    message: str,
    *,
    window: int = 10,
    system_prompt: str = SYSTEM_PROMPT,
) -> list[PromptMessage]:
    """System entry, the last ``window`` history turns, then the new message."""

    messages = [PromptMessage(role="system", content=system_prompt + context)]
    tail = list(history)[-window:] if window > 0 else []
    for item in tail:
        role = ChatRole.ASSISTANT.value if item.role == ChatRole.ASSISTANT else ChatRole.USER.value
        messages.append(PromptMessage(role=role, content=item.message))
    messages.append(PromptMessage(role=ChatRole.USER.value, content=message))
    return messages


def goals_mentioned(message: str, reply: str) -> bool:
    """True when any keyword occurs in the message or the reply, ignoring case."""

    lowered_message = message.lower()
    lowered_reply = reply.lower()
    return any(
        keyword in lowered_message or keyword in lowered_reply for keyword in GOAL_KEYWORDS
    )


def merge_progress_notes(previous: str, message: str) -> str:
    return f"{previous}{NOTES_SEPARATOR}{message}" if previous else message


class CheckInContextBuilder:
    """Reads the store for one invocation and records goal discussion afterwards."""

    def __init__(
        self,
        *,
        bill_repo: "BillRepository",
        goal_repo: "GoalRepository",
        chat_repo: "ChatRepository",
        checkin_repo: "CheckInRepository",
        history_fetch_limit: int = 20,
        history_window: int = 10,
        upcoming_bills_limit: int = 10,
        active_goals_limit: int = 5,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.bill_repo = bill_repo
        self.goal_repo = goal_repo
        self.chat_repo = chat_repo
        self.checkin_repo = checkin_repo
        self.history_fetch_limit = history_fetch_limit
        self.history_window = history_window
        self.upcoming_bills_limit = upcoming_bills_limit
        self.active_goals_limit = active_goals_limit
        self.system_prompt = system_prompt

    def gather(self, session: "UserSession", day: date) -> CheckInSnapshot:
        uid = session.user_id
        return CheckInSnapshot(
            day=day,
            history=self.chat_repo.list_recent(user_id=uid, limit=self.history_fetch_limit),
            upcoming_bills=self.bill_repo.list_upcoming(
                day, user_id=uid, limit=self.upcoming_bills_limit
            ),
            active_goals=self.goal_repo.list_active(user_id=uid, limit=self.active_goals_limit),
            check_in=self.checkin_repo.get_for_day(day, user_id=uid),
        )

    def build_prompt(self, snapshot: CheckInSnapshot, message: str) -> list[PromptMessage]:
        context = build_context(snapshot.upcoming_bills, snapshot.active_goals, snapshot.check_in)
        return compose_messages(
            context,
            snapshot.history,
            message,
            window=self.history_window,
            system_prompt=self.system_prompt,
        )

    def record_discussion(
        self,
        session: "UserSession",
        snapshot: CheckInSnapshot,
        message: str,
        reply: str,
    ) -> Optional[DailyCheckIn]:
        """Upsert today's check-in when goals came up and the user has active goals.

        Notes are built from what was read at ``gather`` time, so two racing
        invocations on the same day resolve as last write wins.
        """

        if not snapshot.active_goals or not goals_mentioned(message, reply):
            return None
        check_in = DailyCheckIn(
            user_id=session.user_id,
            check_in_date=snapshot.day,
            goals_discussed=True,
            progress_notes=merge_progress_notes(snapshot.previous_notes, message),
            updated_at=datetime.now(timezone.utc),
        )
        saved = self.checkin_repo.upsert(check_in, user_id=session.user_id)
        logger.info(
            "Goals discussed today",
            extra={"user_id": session.user_id, "check_in_date": snapshot.day.isoformat()},
        )
        return saved


__all__ = [
    "CheckInContextBuilder",
    "CheckInSnapshot",
    "GOAL_KEYWORDS",
    "NOTES_SEPARATOR",
    "PromptMessage",
    "SYSTEM_PROMPT",
    "build_context",
    "compose_messages",
    "goals_mentioned",
    "merge_progress_notes",
]
