"""Provider implementations for Vita.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for generation providers (complete + stream)
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations

Usage:
    from vita.providers import LLMClient, EmbeddingClient
    from vita.providers.litellm import LiteLLMClient, ChatModels
"""

from vita.providers.base import EmbeddingClient, LLMClient
from vita.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
