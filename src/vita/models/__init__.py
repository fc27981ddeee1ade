"""Data models for Vita."""

from vita.models.conversation import (
    Conversation,
    ConversationDetail,
    ConversationSummary,
    Message,
    Sender,
    TurnResult,
)
from vita.models.entry import EntryDraft, EntryUpdate, KnowledgeEntry
from vita.models.frames import ContentFrame, EndFrame, ErrorFrame, MetadataFrame, StreamFrame
from vita.models.results import ChatAnswer, RagSource, SimilarityResult

__all__ = [
    "KnowledgeEntry",
    "EntryDraft",
    "EntryUpdate",
    "SimilarityResult",
    "RagSource",
    "ChatAnswer",
    "Sender",
    "Message",
    "Conversation",
    "ConversationSummary",
    "ConversationDetail",
    "TurnResult",
    "MetadataFrame",
    "ContentFrame",
    "EndFrame",
    "ErrorFrame",
    "StreamFrame",
]
