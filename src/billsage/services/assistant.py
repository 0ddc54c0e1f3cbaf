"""Outbound call to the generative-text endpoint."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Sequence

import openai
from sqlalchemy.exc import SQLAlchemyError

from ..errors import AssistantError, AssistantNotConfiguredError
from ..logging_config import get_logger
from .checkin import CheckInContextBuilder, CheckInSnapshot, PromptMessage

if TYPE_CHECKING:
    from ..config import BaseConfig
    from ..context import UserSession

logger = get_logger("services.assistant")


class GenerativeClient(Protocol):
    """Anything that turns a role-tagged message list into reply text."""

    def complete(self, messages: Sequence[PromptMessage]) -> str:  # pragma: no cover - interface
        ...


class OpenAICompatibleClient:
    """Chat-completions client; defaults point at Gemini's OpenAI-compatible API."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str,
        base_url: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    @classmethod
    def from_config(cls, config: "BaseConfig") -> "OpenAICompatibleClient":
        return cls(
            api_key=config.GEMINI_API_KEY,
            model=config.ASSISTANT_MODEL,
            base_url=config.ASSISTANT_BASE_URL,
            temperature=config.ASSISTANT_TEMPERATURE,
            max_tokens=config.ASSISTANT_MAX_TOKENS,
        )

    def _get_client(self):
        if not self.api_key:
            raise AssistantNotConfiguredError()
        if self._client is None:
            self._client = openai.OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def complete(self, messages: Sequence[PromptMessage]) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[m.as_dict() for m in messages],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as exc:
            raise AssistantError(str(exc) or exc.__class__.__name__) from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise AssistantError("No response from AI")
        content = choices[0].message.content
        if content is None:
            raise AssistantError("No response from AI")
        return content


class AssistantGateway:
    """Builds the check-in prompt, calls the model, then records goal discussion."""

    def __init__(
        self,
        *,
        builder: CheckInContextBuilder,
        client: GenerativeClient,
        clock: Callable[[], date] = date.today,
    ):
        self.builder = builder
        self.client = client
        self.clock = clock

    def prepare(self, session: "UserSession") -> CheckInSnapshot:
        """Read history, bills, goals and today's check-in."""
        return self.builder.gather(session, self.clock())

    def respond(
        self,
        session: "UserSession",
        message: str,
        *,
        snapshot: Optional[CheckInSnapshot] = None,
    ) -> str:
        """Return the model's reply to ``message``.

        Raises:
            AssistantNotConfiguredError: no API key configured
            AssistantError: the endpoint failed or returned no candidate
        """

        if snapshot is None:
            snapshot = self.prepare(session)
        prompt = self.builder.build_prompt(snapshot, message)
        reply = self.client.complete(prompt)
        try:
            self.builder.record_discussion(session, snapshot, message, reply)
        except SQLAlchemyError:
            # The reply still goes out; only today's check-in row is missed.
            logger.exception(
                "Failed to record goal discussion", extra={"user_id": session.user_id}
            )
        return reply


__all__ = ["AssistantGateway", "GenerativeClient", "OpenAICompatibleClient"]
