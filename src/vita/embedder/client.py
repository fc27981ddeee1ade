"""Client-based embedder implementation."""

import math

from vita.embedder.base import Embedder
from vita.exceptions import EmbeddingUnavailableError
from vita.providers.base import EmbeddingClient


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient and checks the vectors it returns.

    Example:
        from vita.providers.litellm import LiteLLMEmbeddingClient
        from vita.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="gemini/gemini-embedding-001")
        embedder = ClientEmbedder(embedding_client=client, dimensions=3072)
    """

    def __init__(self, embedding_client: EmbeddingClient, dimensions: int | None = None) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            dimensions: Expected vector length. If None, it is pinned to the
                length of the first vector the client returns.
        """
        self._client = embedding_client
        self.dimensions = dimensions

    def _check(self, vectors: list[list[float]], expected: int) -> list[list[float]]:
        if len(vectors) != expected:
            raise EmbeddingUnavailableError(
                f"expected {expected} vectors, provider returned {len(vectors)}"
            )
        checked = []
        for vector in vectors:
            if not vector:
                raise EmbeddingUnavailableError("provider returned an empty vector")
            try:
                values = [float(v) for v in vector]
            except (TypeError, ValueError) as e:
                raise EmbeddingUnavailableError(f"provider returned a malformed vector: {e}") from e
            if not all(math.isfinite(v) for v in values):
                raise EmbeddingUnavailableError("provider returned non-finite values")
            if self.dimensions is None:
                self.dimensions = len(values)
            elif len(values) != self.dimensions:
                raise EmbeddingUnavailableError(
                    f"expected {self.dimensions} dimensions, got {len(values)}"
                )
            checked.append(values)
        return checked

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        if not texts:
            return []
        try:
            vectors = self._client.embed(texts)
        except Exception as e:
            raise EmbeddingUnavailableError(e) from e
        return self._check(vectors, len(texts))

    async def aembed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        try:
            vectors = await self._client.aembed([text])
        except Exception as e:
            raise EmbeddingUnavailableError(e) from e
        return self._check(vectors, 1)[0]
