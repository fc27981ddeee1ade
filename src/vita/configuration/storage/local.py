"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vita.stores import ConversationStore, KnowledgeStore, VectorStore


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    All data is persisted to the specified directory:
    - knowledge.db: Knowledge entries and embeddings (searched in place)
    - conversations.db: Conversations and messages

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.

    Example:
        vita = Vita(provider=LiteLLMProvider(), storage=LocalStorage("./vita_data"))
    """

    data_dir: str

    def build_stores(self) -> tuple[KnowledgeStore, VectorStore, ConversationStore]:
        """Build all three storage components.

        Returns:
            Tuple of (knowledge_store, vector_store, conversation_store)
        """
        from vita.stores import SQLiteConversationStore, SQLiteKnowledgeStore, SQLiteVectorStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        knowledge_path = os.path.join(self.data_dir, "knowledge.db")
        knowledge_store = SQLiteKnowledgeStore(knowledge_path)
        vector_store = SQLiteVectorStore(knowledge_path)
        conversation_store = SQLiteConversationStore(
            os.path.join(self.data_dir, "conversations.db")
        )
        return knowledge_store, vector_store, conversation_store
