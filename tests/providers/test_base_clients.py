# tests/providers/test_base_clients.py
"""Tests for provider ABC defaults."""

import pytest

from vita.providers import EmbeddingClient, LLMClient


class EchoLLMClient(LLMClient):
    def complete(self, messages, temperature=None, max_tokens=None):
        return f"{messages[-1]['content']}@{temperature}"


class ConstantEmbeddingClient(EmbeddingClient):
    def embed(self, texts):
        return [[1.0] for _ in texts]


class TestLLMClientDefaults:
    def test_cannot_instantiate_abc(self):
        with pytest.raises(TypeError):
            LLMClient()

    @pytest.mark.asyncio
    async def test_acomplete_runs_complete(self):
        result = await EchoLLMClient().acomplete([{"role": "user", "content": "hi"}], 0.3)
        assert result == "hi@0.3"

    @pytest.mark.asyncio
    async def test_astream_yields_one_fragment(self):
        client = EchoLLMClient()
        fragments = [f async for f in client.astream([{"role": "user", "content": "hi"}])]
        assert fragments == ["hi@None"]


class TestEmbeddingClientDefaults:
    @pytest.mark.asyncio
    async def test_aembed_runs_embed(self):
        assert await ConstantEmbeddingClient().aembed(["a", "b"]) == [[1.0], [1.0]]
