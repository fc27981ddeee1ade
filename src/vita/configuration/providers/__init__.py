"""Provider configurations."""

from vita.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
