"""Central composition root for Vita."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from vita.configuration import ProviderConfig, StorageConfig
    from vita.embedder import Embedder
    from vita.models import SimilarityResult
    from vita.providers import LLMClient
    from vita.stores import ConversationStore, KnowledgeStore, VectorStore

from vita.conversations import ConversationManager
from vita.pipeline import RAGPipeline
from vita.repository import KnowledgeRepository
from vita.settings import Settings


class Vita:
    """Builds provider clients and stores once and wires them together.

    Nothing in Vita is a module-level singleton: the embedder, the LLM
    client and the stores are created here (or passed in) and injected
    into the repository, pipeline and conversation manager.

    There are two ways to create a Vita instance:

    1. With a provider and a storage bundle:

        from vita import Vita, LiteLLMProvider, LocalStorage

        vita = Vita(
            provider=LiteLLMProvider(
                llm="gemini/gemma-3-12b-it",
                embedding="gemini/gemini-embedding-001",
            ),
            storage=LocalStorage("./vita_data"),
        )
        answer = vita.pipeline.answer("Apa itu demam berdarah?")

    2. With explicit components (tests, custom backends):

        vita = Vita(
            embedder=my_embedder,
            llm_client=my_llm_client,
            knowledge_store=SQLiteKnowledgeStore("./data/knowledge.db"),
            vector_store=SQLiteVectorStore("./data/knowledge.db"),
            conversation_store=SQLiteConversationStore("./data/conversations.db"),
        )
    """

    def __init__(
        self,
        *,
        # EITHER provider config...
        provider: ProviderConfig | None = None,
        # ...OR explicit clients
        embedder: Embedder | None = None,
        llm_client: LLMClient | None = None,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        knowledge_store: KnowledgeStore | None = None,
        vector_store: VectorStore | None = None,
        conversation_store: ConversationStore | None = None,
        # Common
        settings: Settings | None = None,
    ) -> None:
        """Create a Vita instance.

        Raises:
            ValueError: If neither or both of a bundle and explicit components
                        are provided for either providers or storage.
        """
        self.settings = settings if settings is not None else Settings()

        if provider is not None:
            if embedder is not None or llm_client is not None:
                raise ValueError("Cannot mix 'provider' with explicit embedder/llm_client")
            self.embedder = provider.build_embedder(self.settings)
            self.llm_client = provider.build_llm_client(self.settings)
        elif embedder is not None and llm_client is not None:
            self.embedder = embedder
            self.llm_client = llm_client
        else:
            raise ValueError("Must provide either 'provider' or both 'embedder' and 'llm_client'")

        if storage is not None:
            if any([knowledge_store, vector_store, conversation_store]):
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            (
                self.knowledge_store,
                self.vector_store,
                self.conversation_store,
            ) = storage.build_stores()
        elif all([knowledge_store, vector_store, conversation_store]):
            self.knowledge_store = cast("KnowledgeStore", knowledge_store)
            self.vector_store = cast("VectorStore", vector_store)
            self.conversation_store = cast("ConversationStore", conversation_store)
        else:
            raise ValueError(
                "Must provide either 'storage' bundle or all explicit stores "
                "(knowledge_store, vector_store, conversation_store)"
            )

        self.repository = KnowledgeRepository(
            knowledge_store=self.knowledge_store,
            vector_store=self.vector_store,
            embedder=self.embedder,
        )
        self.pipeline = RAGPipeline(
            repository=self.repository,
            llm_client=self.llm_client,
            default_limit=self.settings.default_limit,
            default_threshold=self.settings.similarity_threshold,
            default_temperature=self.settings.temperature,
            stream_buffer_size=self.settings.stream_buffer_size,
        )
        self.conversations = ConversationManager(
            store=self.conversation_store,
            pipeline=self.pipeline,
            llm_client=self.llm_client,
            title_temperature=self.settings.title_temperature,
            title_max_tokens=self.settings.title_max_tokens,
            title_max_length=self.settings.title_max_length,
            locale=self.settings.locale,
        )

    def search(
        self, term: str, limit: int | None = None, threshold: float | None = None
    ) -> list[SimilarityResult]:
        """Knowledge search with the configured defaults."""
        return self.repository.search(
            term,
            self.settings.search_limit if limit is None else limit,
            self.settings.similarity_threshold if threshold is None else threshold,
        )
