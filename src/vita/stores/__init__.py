"""Storage abstractions for Vita."""

from vita.stores.base import ConversationStore, KnowledgeStore, VectorStore
from vita.stores.sqlite_conversation import SQLiteConversationStore
from vita.stores.sqlite_knowledge import SQLiteKnowledgeStore
from vita.stores.sqlite_vector import SQLiteVectorStore

__all__ = [
    "KnowledgeStore",
    "VectorStore",
    "ConversationStore",
    "SQLiteKnowledgeStore",
    "SQLiteVectorStore",
    "SQLiteConversationStore",
]
