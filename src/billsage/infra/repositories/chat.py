"""SQLModel implementation of the chat history repository."""

from __future__ import annotations

from sqlalchemy import func
from sqlmodel import select

from ...models.chat import ChatMessage
from ..database import SessionFactory


class SQLModelChatRepository:
    """SQLModel-based chat history repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def append(self, message: ChatMessage, *, user_id: int) -> ChatMessage:
        """Persist one message."""
        with self.session_factory() as session:
            message.user_id = user_id
            session.add(message)
            session.commit()
            session.refresh(message)
            session.expunge(message)
            return message

    def list_recent(self, *, user_id: int, limit: int) -> list[ChatMessage]:
        """Return the newest ``limit`` messages in ascending time order."""
        with self.session_factory() as session:
            statement = (
                select(ChatMessage)
                .where(ChatMessage.user_id == user_id)
                .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())  # type: ignore
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
        rows.reverse()
        return rows

    def count(self, *, user_id: int) -> int:
        """Return how many messages the user has."""
        with self.session_factory() as session:
            total = session.exec(
                select(func.count()).select_from(ChatMessage).where(ChatMessage.user_id == user_id)
            ).one()
            return int(total)
