"""Knowledge repository: entry CRUD plus thresholded similarity search."""

import asyncio
import logging

from vita.embedder import Embedder
from vita.exceptions import NotFoundError, SearchFailedError, VitaError
from vita.models import EntryDraft, EntryUpdate, KnowledgeEntry, SimilarityResult
from vita.models.entry import utc_now
from vita.stores import KnowledgeStore, VectorStore
from vita.validation import check_search_args, require_text

logger = logging.getLogger(__name__)

ENTRY = "Knowledge entry"


def rank_results(
    matches: list[tuple[KnowledgeEntry, float]], limit: int, threshold: float
) -> list[SimilarityResult]:
    """Filter to ``similarity >= threshold``, order, and truncate to ``limit``.

    Order is similarity descending; equal scores put the newest entry first.
    """
    # Scores come back as 1 - distance; allow for float error at the boundary
    kept = [(entry, score) for entry, score in matches if score >= threshold - 1e-12]
    # Two stable passes: recency first, then similarity
    kept.sort(key=lambda m: m[0].created_at, reverse=True)
    kept.sort(key=lambda m: m[1], reverse=True)
    return [SimilarityResult(entry=entry, similarity=score) for entry, score in kept[:limit]]


class KnowledgeRepository:
    """Owns knowledge entries and the similarity search over them.

    Embeddings are computed synchronously before a write is acknowledged.
    A content change always replaces the embedding; other edits never
    call the embedding provider.
    """

    def __init__(
        self,
        knowledge_store: KnowledgeStore,
        vector_store: VectorStore,
        embedder: Embedder,
    ) -> None:
        """Initialize the repository.

        Args:
            knowledge_store: Persistence for entries (including the embedding column)
            vector_store: Similarity search over indexed entries
            embedder: Embedder used for entry content and queries
        """
        self.knowledge_store = knowledge_store
        self.vector_store = vector_store
        self.embedder = embedder

    def create_entry(self, draft: EntryDraft) -> KnowledgeEntry:
        """Embed and store a new entry."""
        require_text(draft.title, "title")
        require_text(draft.content, "content")
        embedding = self.embedder.embed_text(draft.content)
        entry = KnowledgeEntry(
            title=draft.title,
            content=draft.content,
            source_url=draft.source_url,
            embedding=embedding,
        )
        self.knowledge_store.put(entry)
        logger.info("Created knowledge entry %s (%r)", entry.id, entry.title)
        return entry

    def get_entry(self, entry_id: str) -> KnowledgeEntry:
        entry = self.knowledge_store.get(entry_id)
        if entry is None:
            raise NotFoundError(ENTRY, entry_id)
        return entry

    def list_entries(self) -> list[KnowledgeEntry]:
        """All entries, newest first."""
        return self.knowledge_store.list_entries()

    def count_entries(self) -> int:
        return self.knowledge_store.count_entries()

    def count_indexed(self) -> int:
        """Entries that carry an embedding and can be found by search."""
        return self.knowledge_store.count_indexed()

    def update_entry(self, entry_id: str, update: EntryUpdate) -> KnowledgeEntry:
        """Apply a partial update, re-embedding only when the content changes."""
        entry = self.get_entry(entry_id)
        changes = update.model_dump(exclude_none=True)
        if not changes:
            return entry

        if "content" in changes:
            require_text(changes["content"], "content")
            if changes["content"] != entry.content:
                changes["embedding"] = self.embedder.embed_text(changes["content"])
                logger.debug("Re-embedded entry %s after content change", entry_id)
        if "title" in changes:
            require_text(changes["title"], "title")

        updated = entry.model_copy(update={**changes, "updated_at": utc_now()})
        self.knowledge_store.put(updated)
        return updated

    def reindex_entry(self, entry_id: str) -> KnowledgeEntry:
        """Recompute an entry's embedding from its current content."""
        entry = self.get_entry(entry_id)
        embedding = self.embedder.embed_text(entry.content)
        if not self.knowledge_store.set_embedding(entry_id, embedding):
            raise NotFoundError(ENTRY, entry_id)
        return entry.model_copy(update={"embedding": embedding})

    def delete_entry(self, entry_id: str) -> KnowledgeEntry:
        entry = self.get_entry(entry_id)
        if not self.knowledge_store.delete(entry_id):
            raise NotFoundError(ENTRY, entry_id)
        logger.info("Deleted knowledge entry %s", entry_id)
        return entry

    def _query_store(
        self, embedding: list[float], limit: int, threshold: float
    ) -> list[SimilarityResult]:
        try:
            matches = self.vector_store.query(embedding, limit, max_distance=1.0 - threshold)
        except VitaError:
            raise
        except Exception as e:
            raise SearchFailedError(e) from e
        return rank_results(matches, limit, threshold)

    def search(self, query: str, limit: int = 5, threshold: float = 0.6) -> list[SimilarityResult]:
        """Find entries similar to ``query``.

        Args:
            query: Free-text query
            limit: Maximum number of results (>= 1)
            threshold: Minimum similarity in [0, 1]

        Returns:
            Results ordered by descending similarity. Empty when nothing
            qualifies; callers treat that as "no relevant knowledge".

        Raises:
            InvalidInputError: If the arguments are out of range
            EmbeddingUnavailableError: If the query could not be embedded
            SearchFailedError: If the vector store query failed
        """
        require_text(query, "query")
        limit, threshold = check_search_args(limit, threshold)
        embedding = self.embedder.embed_text(query)
        results = self._query_store(embedding, limit, threshold)
        logger.info(
            "Search returned %d result(s) (limit=%d, threshold=%.2f)",
            len(results),
            limit,
            threshold,
        )
        return results

    async def asearch(
        self, query: str, limit: int = 5, threshold: float = 0.6
    ) -> list[SimilarityResult]:
        """Async version of search(); the store query runs in a worker thread."""
        require_text(query, "query")
        limit, threshold = check_search_args(limit, threshold)
        embedding = await self.embedder.aembed_text(query)
        results = await asyncio.to_thread(self._query_store, embedding, limit, threshold)
        logger.info(
            "Search returned %d result(s) (limit=%d, threshold=%.2f)",
            len(results),
            limit,
            threshold,
        )
        return results
