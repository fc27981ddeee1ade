"""Embedding functionality for Vita."""

from vita.embedder.base import Embedder
from vita.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
