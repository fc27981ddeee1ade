"""Vita - health knowledge base with retrieval-grounded chat.

Knowledge entries are embedded when they are written, retrieved by cosine
similarity above a threshold, and used to ground generated answers. Answers
can be returned whole or streamed, and chat turns are persisted per user.

Quick Start (LiteLLM + Local Storage):
    from vita import Vita, LiteLLMProvider, LocalStorage, EntryDraft

    vita = Vita(
        provider=LiteLLMProvider(
            llm="gemini/gemma-3-12b-it",
            embedding="gemini/gemini-embedding-001",
        ),
        storage=LocalStorage("./vita_data"),
    )

    vita.repository.create_entry(EntryDraft(title="Flu", content="..."))
    answer = vita.pipeline.answer("Apa gejala flu?")

    turn = vita.conversations.start_or_continue("user-1", "Apa gejala flu?")

Streaming:
    async for frame in vita.pipeline.stream_frames("Apa gejala flu?"):
        yield frame.to_sse()
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vita-rag")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

# Configuration objects
from vita.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from vita.conversations import ConversationManager
from vita.embedder import ClientEmbedder, Embedder

# Errors
from vita.exceptions import (
    DependencyError,
    EmbeddingUnavailableError,
    GenerationUnavailableError,
    InvalidInputError,
    NotFoundError,
    SearchFailedError,
    VitaError,
)

# File loading
from vita.loaders import HTMLEntryLoader

# Core models
from vita.models import (
    ChatAnswer,
    ContentFrame,
    Conversation,
    ConversationDetail,
    ConversationSummary,
    EndFrame,
    EntryDraft,
    EntryUpdate,
    ErrorFrame,
    KnowledgeEntry,
    Message,
    MetadataFrame,
    RagSource,
    Sender,
    SimilarityResult,
    StreamFrame,
    TurnResult,
)

# Pipelines
from vita.pipeline import RAGPipeline, StreamingAnswer

# Provider ABCs
from vita.providers import EmbeddingClient, LLMClient
from vita.repository import KnowledgeRepository

# Configuration
from vita.settings import Settings

# Storage ABCs
from vita.stores import (
    ConversationStore,
    KnowledgeStore,
    SQLiteConversationStore,
    SQLiteKnowledgeStore,
    SQLiteVectorStore,
    VectorStore,
)

# Central configuration
from vita.vita import Vita

__all__ = [
    # Version
    "__version__",
    # Models
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
    # Errors
    "VitaError",
    "InvalidInputError",
    "NotFoundError",
    "DependencyError",
    "EmbeddingUnavailableError",
    "SearchFailedError",
    "GenerationUnavailableError",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage ABCs
    "KnowledgeStore",
    "VectorStore",
    "ConversationStore",
    "SQLiteKnowledgeStore",
    "SQLiteVectorStore",
    "SQLiteConversationStore",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "KnowledgeRepository",
    "RAGPipeline",
    "StreamingAnswer",
    "ConversationManager",
    # Central configuration
    "Vita",
    # File loading
    "HTMLEntryLoader",
]
