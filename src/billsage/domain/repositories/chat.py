"""Chat history repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.chat import ChatMessage


class ChatRepository(Protocol):
    """Append-only store of conversation turns."""

    def append(self, message: ChatMessage, *, user_id: int) -> ChatMessage:
        """Persist one message."""
        ...

    def list_recent(self, *, user_id: int, limit: int) -> list[ChatMessage]:
        """Return the newest ``limit`` messages in ascending time order."""
        ...

    def count(self, *, user_id: int) -> int:
        """Return how many messages the user has."""
        ...
