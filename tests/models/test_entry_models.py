# tests/models/test_entry_models.py
"""Tests for knowledge entry and result models."""

import pytest
from pydantic import ValidationError

from vita.models import ChatAnswer, EntryUpdate, KnowledgeEntry, SimilarityResult


class TestKnowledgeEntry:
    def test_defaults(self):
        entry = KnowledgeEntry(title="Flu", content="Infeksi virus")
        assert entry.id
        assert entry.source_url == ""
        assert entry.embedding is None
        assert not entry.is_indexed
        assert entry.created_at.tzinfo is not None

    def test_unique_ids(self):
        a = KnowledgeEntry(title="A", content="a")
        b = KnowledgeEntry(title="B", content="b")
        assert a.id != b.id

    def test_indexed(self):
        entry = KnowledgeEntry(title="Flu", content="x", embedding=[0.1, 0.2])
        assert entry.is_indexed


class TestEntryUpdate:
    def test_unset_fields_are_dropped(self):
        update = EntryUpdate(title="Baru")
        assert update.model_dump(exclude_none=True) == {"title": "Baru"}


class TestSimilarityResult:
    def test_summary(self):
        entry = KnowledgeEntry(title="Flu", content="x", source_url="https://example.org/flu")
        result = SimilarityResult(entry=entry, similarity=0.82)
        source = result.summary()
        assert source.id == entry.id
        assert source.title == "Flu"
        assert source.similarity == 0.82
        assert source.source_url == "https://example.org/flu"

    @pytest.mark.parametrize("similarity", [-0.1, 1.1])
    def test_similarity_bounds(self, similarity):
        entry = KnowledgeEntry(title="Flu", content="x")
        with pytest.raises(ValidationError):
            SimilarityResult(entry=entry, similarity=similarity)


class TestChatAnswer:
    def test_camel_case_dump(self):
        answer = ChatAnswer(
            text="Halo",
            rag_results=[],
            threshold=0.6,
            total_results=0,
            temperature=0.5,
            has_results=False,
        )
        data = answer.model_dump(by_alias=True)
        assert data["ragResults"] == []
        assert data["totalResults"] == 0
        assert data["hasResults"] is False
