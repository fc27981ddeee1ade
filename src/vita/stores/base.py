"""Abstract base classes for storage."""

from abc import ABC, abstractmethod

from vita.models import Conversation, ConversationSummary, KnowledgeEntry, Message


class KnowledgeStore(ABC):
    """Abstract base class for knowledge entry persistence."""

    @abstractmethod
    def put(self, entry: KnowledgeEntry) -> None:
        """Store an entry, overwriting if it exists."""
        ...

    @abstractmethod
    def get(self, entry_id: str) -> KnowledgeEntry | None:
        """Retrieve an entry by ID. Returns None if not found."""
        ...

    @abstractmethod
    def list_entries(self) -> list[KnowledgeEntry]:
        """List all entries, newest first."""
        ...

    @abstractmethod
    def set_embedding(self, entry_id: str, embedding: list[float] | None) -> bool:
        """Replace the embedding of one entry. Returns False if the entry is missing."""
        ...

    @abstractmethod
    def delete(self, entry_id: str) -> bool:
        """Delete an entry by ID. Returns False if nothing was deleted."""
        ...

    @abstractmethod
    def count_entries(self) -> int:
        """Count the total number of entries in the store."""
        ...

    @abstractmethod
    def count_indexed(self) -> int:
        """Count entries that have an embedding."""
        ...


class VectorStore(ABC):
    """Similarity search over indexed knowledge entries.

    Entries without an embedding are never returned.
    """

    @abstractmethod
    def query(
        self, embedding: list[float], limit: int, max_distance: float
    ) -> list[tuple[KnowledgeEntry, float]]:
        """Search for entries within ``max_distance`` cosine distance of ``embedding``.

        Returns (entry, similarity) pairs with similarity = 1 - cosine distance,
        ordered by ascending distance, at most ``limit`` of them.
        """
        ...


class ConversationStore(ABC):
    """Abstract base class for conversation and message persistence.

    Conversation lookups are scoped by owner: a conversation that exists
    but belongs to someone else is reported exactly like a missing one.
    """

    @abstractmethod
    def create_conversation(self, conversation: Conversation) -> None:
        """Store a new conversation."""
        ...

    @abstractmethod
    def get_conversation(self, conversation_id: str, owner_id: str) -> Conversation | None:
        """Retrieve a conversation owned by ``owner_id``."""
        ...

    @abstractmethod
    def list_conversations(
        self, owner_id: str, title_contains: str | None = None
    ) -> list[ConversationSummary]:
        """List an owner's conversations with message counts, most recently updated first.

        If ``title_contains`` is given, keep only titles containing it (case-insensitive).
        """
        ...

    @abstractmethod
    def update_title(self, conversation_id: str, owner_id: str, title: str) -> Conversation | None:
        """Rename a conversation and bump its updated_at. Returns None if not found."""
        ...

    @abstractmethod
    def delete_conversation(self, conversation_id: str, owner_id: str) -> bool:
        """Delete a conversation and all of its messages."""
        ...

    @abstractmethod
    def add_message(self, message: Message) -> None:
        """Append a message and bump its conversation's updated_at."""
        ...

    @abstractmethod
    def list_messages(self, conversation_id: str) -> list[Message]:
        """List a conversation's messages in chronological order."""
        ...
