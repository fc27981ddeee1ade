"""LiteLLM provider clients for Vita.

This module contains LiteLLM-based client implementations:
- LiteLLMClient: Completion and streaming generation using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels: Curated chat model constants
- EmbeddingModels: Curated embedding model constants

Usage:
    from vita.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GEMMA_3_12B)
"""

from vita.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from vita.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
