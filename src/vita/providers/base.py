"""Abstract base classes for generation and embedding providers."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class LLMClient(ABC):
    """Abstract base class for generation providers.

    Implementations provide text generation either as one completed string
    or as a lazily produced sequence of text fragments.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None, max_tokens=None):
                return my_api.chat(messages, temp=temperature)
    """

    model: str = ""

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "user", "content": "Hello"}]
            temperature: Optional sampling temperature (0.0-2.0).
                         If None, use provider default.
            max_tokens: Optional cap on generated tokens.

        Returns:
            The generated text response.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages (async).

        Default implementation runs sync complete() in a worker thread.
        Override in subclasses for true async behavior.
        """
        return await asyncio.to_thread(self.complete, messages, temperature, max_tokens)

    async def astream(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Generate a completion as a sequence of text fragments.

        The iterator is finite, single-consumer and not restartable. Closing it
        early must release the provider-side stream.

        Default implementation yields the full acomplete() result once.
        """
        yield await self.acomplete(messages, temperature, max_tokens)


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Implementations of this class generate vector embeddings for text.
    The interface supports batched embedding for efficiency.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors (async). Defaults to embed() in a worker thread."""
        return await asyncio.to_thread(self.embed, texts)
