# tests/conftest.py
"""Shared pytest fixtures."""

import asyncio
import os
import tempfile

import pytest

from vita.conversations import ConversationManager
from vita.embedder import Embedder
from vita.pipeline import RAGPipeline
from vita.providers import LLMClient
from vita.repository import KnowledgeRepository
from vita.stores import SQLiteConversationStore, SQLiteKnowledgeStore, SQLiteVectorStore

# Unit vectors: anything not in the table is orthogonal to every entry
VECTORS = {
    "flu": [1.0, 0.0, 0.0],
    "demam berdarah": [0.0, 1.0, 0.0],
    # cos(flu, influenza) = 0.82
    "influenza": [0.82, 0.5723635208501674, 0.0],
}
DEFAULT_VECTOR = [0.0, 0.0, 1.0]


class KeywordEmbedder(Embedder):
    """Embeds text to the vector of the first keyword it contains."""

    def __init__(self, table=None, default=None):
        self.table = dict(VECTORS if table is None else table)
        self.default = list(DEFAULT_VECTOR if default is None else default)
        self.calls: list[str] = []
        self.error: Exception | None = None

    def embed_text(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        lowered = text.lower()
        # Longest keyword wins so "demam berdarah" beats shorter overlaps
        for keyword in sorted(self.table, key=len, reverse=True):
            if keyword in lowered:
                return list(self.table[keyword])
        return list(self.default)

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_text(t) for t in texts]


class ScriptedLLMClient(LLMClient):
    """LLM client with canned replies and call bookkeeping.

    Calls made with ``max_tokens`` are title requests and get ``title``;
    everything else gets ``reply`` (or ``fragments`` when streamed).
    """

    model = "scripted"

    def __init__(
        self,
        reply="Flu adalah infeksi virus.",
        title="Gejala Flu",
        fragments=("Flu ", "adalah ", "infeksi ", "virus."),
    ):
        self.reply = reply
        self.title = title
        self.fragments = list(fragments)
        self.answer_error: Exception | None = None
        self.title_error: Exception | None = None
        self.stream_error_after: int | None = None
        self.complete_calls: list[dict] = []
        self.title_calls: list[dict] = []
        self.stream_calls: list[dict] = []
        self.streams_closed = 0

    @property
    def answer_call_count(self) -> int:
        return len(self.complete_calls) + len(self.stream_calls)

    def complete(self, messages, temperature=None, max_tokens=None):
        call = {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        if max_tokens is not None:
            self.title_calls.append(call)
            if self.title_error is not None:
                raise self.title_error
            return self.title
        self.complete_calls.append(call)
        if self.answer_error is not None:
            raise self.answer_error
        return self.reply

    async def astream(self, messages, temperature=None, max_tokens=None):
        self.stream_calls.append({"messages": messages, "temperature": temperature})
        try:
            if self.answer_error is not None:
                raise self.answer_error
            for i, fragment in enumerate(self.fragments):
                if self.stream_error_after is not None and i == self.stream_error_after:
                    raise RuntimeError("connection reset by provider")
                await asyncio.sleep(0)
                yield fragment
        finally:
            self.streams_closed += 1


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def knowledge_db(temp_dir):
    return os.path.join(temp_dir, "knowledge.db")


@pytest.fixture
def knowledge_store(knowledge_db):
    return SQLiteKnowledgeStore(knowledge_db)


@pytest.fixture
def vector_store(knowledge_db):
    return SQLiteVectorStore(knowledge_db)


@pytest.fixture
def conversation_store(temp_dir):
    return SQLiteConversationStore(os.path.join(temp_dir, "conversations.db"))


@pytest.fixture
def embedder():
    return KeywordEmbedder()


@pytest.fixture
def llm_client():
    return ScriptedLLMClient()


@pytest.fixture
def repository(knowledge_store, vector_store, embedder):
    return KnowledgeRepository(knowledge_store, vector_store, embedder)


@pytest.fixture
def pipeline(repository, llm_client):
    return RAGPipeline(repository=repository, llm_client=llm_client)


@pytest.fixture
def manager(conversation_store, pipeline, llm_client):
    return ConversationManager(store=conversation_store, pipeline=pipeline, llm_client=llm_client)
