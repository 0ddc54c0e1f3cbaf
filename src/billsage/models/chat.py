"""Append-only assistant conversation history."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(SQLModel, table=True):
    """One turn of the conversation, written once and never edited."""

    __tablename__: ClassVar[str] = "chat_message"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    message: str = Field(nullable=False)
    role: str = Field(nullable=False, max_length=16)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )
