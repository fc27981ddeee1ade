"""Configuration objects for Vita.

- ProviderConfig / StorageConfig: protocols the Vita class builds from
- LiteLLMProvider: LiteLLM-backed embedding and generation clients
- LocalStorage: SQLite files under one data directory
"""

from vita.configuration.base import ProviderConfig, StorageConfig
from vita.configuration.providers import LiteLLMProvider
from vita.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
