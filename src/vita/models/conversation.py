"""Conversation and message data models."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from vita.models.entry import utc_now
from vita.models.results import ChatAnswer


class Sender(str, Enum):
    """Author of a message within a conversation."""

    USER = "USER"
    BOT = "BOT"


class Message(BaseModel):
    """A single message. Owned exclusively by one conversation."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    conversation_id: str
    sender: Sender
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class Conversation(BaseModel):
    """A titled thread of messages owned by one user."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str
    title: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ConversationSummary(BaseModel):
    """A conversation annotated with its message count (list/search shape)."""

    conversation: Conversation
    message_count: int = 0


class ConversationDetail(BaseModel):
    """A conversation with all of its messages in chronological order."""

    conversation: Conversation
    messages: list[Message]


class TurnResult(BaseModel):
    """Outcome of one persisted turn: the user message, the reply, and the answer."""

    conversation: Conversation
    user_message: Message
    bot_message: Message
    answer: ChatAnswer
