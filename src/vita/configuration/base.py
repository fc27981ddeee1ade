"""Protocol definitions for configuration objects.

Any frozen dataclass with the right methods satisfies these interfaces
without inheritance. Storage implementations themselves use ABCs
(``vita.stores.base``) because they share behavior by inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vita.embedder import Embedder
    from vita.providers import LLMClient
    from vita.settings import Settings
    from vita.stores import ConversationStore, KnowledgeStore, VectorStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the AI components:
    - Embedder: Creates vector embeddings for entries and queries
    - LLMClient: Generates answers, streamed answers and titles
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for creating vector embeddings."""
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a generation client."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - KnowledgeStore: Knowledge entries and their embeddings
    - VectorStore: Similarity search over indexed entries
    - ConversationStore: Conversations and messages
    """

    def build_stores(self) -> tuple[KnowledgeStore, VectorStore, ConversationStore]:
        """Build all three storage components.

        Returns:
            Tuple of (knowledge_store, vector_store, conversation_store)
        """
        ...
