"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vita.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from vita.embedder import Embedder
    from vita.providers import LLMClient
    from vita.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for generation and embedding calls.

    Args:
        llm: LiteLLM model identifier for answers and titles.
             Examples: "gemini/gemma-3-12b-it", "openai/gpt-5-mini"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "gemini/gemini-embedding-001", "openai/text-embedding-3-small"
        dimensions: Expected embedding length. None pins it to the first vector seen.

    Example:
        provider = LiteLLMProvider(
            llm="gemini/gemma-3-12b-it",
            embedding="gemini/gemini-embedding-001",
        )
    """

    llm: str = ChatModels.GEMMA_3_12B
    embedding: str = EmbeddingModels.GEMINI_EMBEDDING_001
    dimensions: int | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client.

        Args:
            settings: Settings containing num_retries for rate limit handling.
        """
        from vita.embedder import ClientEmbedder
        from vita.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            num_retries=settings.num_retries,
        )
        return ClientEmbedder(embedding_client=embedding_client, dimensions=self.dimensions)

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a LiteLLMClient for answers, streams and titles."""
        from vita.providers.litellm import LiteLLMClient

        return LiteLLMClient(model=self.llm, num_retries=settings.num_retries)
