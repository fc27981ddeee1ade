"""Behavioral settings for Vita.

Settings are passed programmatically - the library does not read from
environment variables. Applications that want env-based config can use
``vita.config.build_settings``, which reads ``VITA_*`` variables and
YAML files at the application layer and passes values in explicitly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Behavioral settings for Vita.

    These settings control how Vita behaves, independent of which
    LLM/embedding provider is used.

    Example:
        settings = Settings(default_limit=5, similarity_threshold=0.7)
    """

    # Retrieval
    default_limit: int = Field(default=3, ge=1)
    similarity_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    search_limit: int = Field(default=5, ge=1)  # standalone knowledge search

    # Generation
    temperature: float = Field(default=0.5, ge=0.0, le=2.0)
    stream_buffer_size: int = Field(default=32, ge=1)

    # Conversation titles
    title_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    title_max_tokens: int = Field(default=100, ge=1)
    title_max_length: int = Field(default=100, ge=1)
    locale: str = "id-ID"

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = Field(default=3, ge=0)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> Settings:
        """Build Settings from a plain mapping, ignoring None values."""
        return cls(**{k: v for k, v in values.items() if v is not None})
