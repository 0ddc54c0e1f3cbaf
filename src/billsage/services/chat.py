"""Conversation turns: persist the user's message, ask the assistant, persist the answer.

The thread stays coherent on failure: whatever goes wrong after the user's
message is stored, an assistant-role message is stored in reply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..errors import AssistantError, AssistantNotConfiguredError, PreconditionError
from ..logging_config import get_logger
from ..models.chat import ChatMessage, ChatRole

if TYPE_CHECKING:
    from ..context import UserSession
    from ..domain.repositories import ChatRepository
    from .assistant import AssistantGateway

logger = get_logger("services.chat")

GREETING = (
    "Hello! I'm your personal financial assistant. I'm here to help you manage your bills, "
    "track your goals, and make smart financial decisions. Let's start with a quick check-in. "
    "How are you doing today?"
)
NOT_CONFIGURED_MESSAGE = (
    "AI not configured yet. Please add your Gemini API key (GEMINI_API_KEY) to the environment."
)
GENERIC_FAILURE_MESSAGE = "Sorry, I encountered an error. Please try again."


@dataclass(slots=True)
class ChatTurn:
    """Outcome of one user message.

    ``reply`` is set on success; otherwise ``error`` carries the raw failure
    and ``stored`` holds the user-facing text that was saved instead.
    """

    user_message: ChatMessage
    stored: ChatMessage
    reply: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatService:
    def __init__(
        self,
        *,
        chat_repo: "ChatRepository",
        gateway: "AssistantGateway",
        view_limit: int = 50,
    ):
        self.chat_repo = chat_repo
        self.gateway = gateway
        self.view_limit = view_limit

    def load_history(self, session: "UserSession") -> list[ChatMessage]:
        """Return recent messages, greeting first-time users."""

        if self.chat_repo.count(user_id=session.user_id) == 0:
            self._append(session, GREETING, ChatRole.ASSISTANT)
        return self.chat_repo.list_recent(user_id=session.user_id, limit=self.view_limit)

    def send_message(self, session: "UserSession", text: str) -> ChatTurn:
        message = (text or "").strip()
        if not message:
            raise PreconditionError("Message is required")

        # Read context before storing the new turn so it is sent exactly once.
        snapshot = self.gateway.prepare(session)
        user_message = self._append(session, message, ChatRole.USER)

        try:
            reply = self.gateway.respond(session, message, snapshot=snapshot)
        except AssistantNotConfiguredError as exc:
            logger.error("Assistant is not configured", extra={"user_id": session.user_id})
            return self._failed(session, user_message, str(exc), NOT_CONFIGURED_MESSAGE)
        except AssistantError as exc:
            logger.error("Assistant call failed: %s", exc, extra={"user_id": session.user_id})
            return self._failed(session, user_message, str(exc), f"Error: {exc}")
        except Exception as exc:
            logger.exception("Unexpected failure while answering chat message")
            return self._failed(
                session, user_message, str(exc) or exc.__class__.__name__, GENERIC_FAILURE_MESSAGE
            )

        stored = self._append(session, reply, ChatRole.ASSISTANT)
        return ChatTurn(user_message=user_message, stored=stored, reply=reply)

    def _failed(
        self, session: "UserSession", user_message: ChatMessage, error: str, text: str
    ) -> ChatTurn:
        stored = self._append(session, text, ChatRole.ASSISTANT)
        return ChatTurn(user_message=user_message, stored=stored, error=error)

    def _append(self, session: "UserSession", text: str, role: ChatRole) -> ChatMessage:
        return self.chat_repo.append(
            ChatMessage(user_id=session.user_id, message=text, role=role.value),
            user_id=session.user_id,
        )


__all__ = [
    "ChatService",
    "ChatTurn",
    "GENERIC_FAILURE_MESSAGE",
    "GREETING",
    "NOT_CONFIGURED_MESSAGE",
]
