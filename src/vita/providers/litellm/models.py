"""Curated model constants for the LiteLLM provider.

You can always pass any valid LiteLLM model string directly.
"""


class ChatModels:
    """Chat/completion models for answers and conversation titles (via LiteLLMClient)."""

    # Google - served through the Gemini API
    GEMMA_3_12B = "gemini/gemma-3-12b-it"
    GEMMA_3_27B = "gemini/gemma-3-27b-it"
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"

    # OpenAI
    GPT_5_MINI = "openai/gpt-5-mini"

    # Anthropic
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"

    # Local
    OLLAMA_LLAMA_32 = "ollama/llama3.2"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"
