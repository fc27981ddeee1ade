"""LiteLLM client implementations for generation and embedding APIs."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import litellm

from vita.providers.base import EmbeddingClient, LLMClient
from vita.providers.litellm.models import ChatModels, EmbeddingModels

logger = logging.getLogger(__name__)


class LiteLLMClient(LLMClient):
    """LiteLLM-based client for text generation.

    Supports any model available through LiteLLM (Gemini, OpenAI, Anthropic,
    Ollama, etc.).

    Example:
        from vita.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GEMMA_3_12B)
        response = client.complete([{"role": "user", "content": "Hello"}])

        async for fragment in client.astream([{"role": "user", "content": "Hello"}]):
            print(fragment, end="")
    """

    def __init__(
        self,
        model: str = ChatModels.GEMMA_3_12B,
        num_retries: int = 3,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
        """
        self.model = model
        self.num_retries = num_retries

    def _completion_kwargs(
        self,
        messages: list[dict],
        temperature: float | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        return completion_kwargs

    def _extract_content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(**self._completion_kwargs(messages, temperature, max_tokens))
        return self._extract_content(response)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(
            **self._completion_kwargs(messages, temperature, max_tokens)
        )
        return self._extract_content(response)

    async def astream(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Stream a completion using LiteLLM, yielding non-empty text deltas."""
        response = await litellm.acompletion(
            **self._completion_kwargs(messages, temperature, max_tokens),
            stream=True,
        )
        try:
            async for chunk in response:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content
                if text:
                    yield text
        finally:
            # Release the provider stream even when the consumer stops early
            aclose = getattr(response, "aclose", None)
            if aclose is not None:
                await aclose()
            logger.debug("Closed generation stream for model %s", self.model)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from vita.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.GEMINI_EMBEDDING_001)
        embeddings = client.embed(["demam dan batuk", "sakit kepala"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.GEMINI_EMBEDDING_001,
        num_retries: int = 3,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
            num_retries: Number of retries on rate limit errors. Default: 3.
        """
        self.model = model
        self.num_retries = num_retries

    @staticmethod
    def _ordered(response: Any) -> list[list[float]]:
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        response = litellm.embedding(
            model=self.model,
            input=texts,
            num_retries=self.num_retries,
        )
        return self._ordered(response)

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []

        response = await litellm.aembedding(
            model=self.model,
            input=texts,
            num_retries=self.num_retries,
        )
        return self._ordered(response)
