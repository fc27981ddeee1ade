"""Cosine similarity search over the SQLite knowledge table."""

import logging
import sqlite3
from pathlib import Path

import numpy as np

from vita.models import KnowledgeEntry
from vita.stores.base import VectorStore
from vita.stores.sqlite_knowledge import ENTRY_COLUMNS, TABLE, init_knowledge_schema, row_to_entry

logger = logging.getLogger(__name__)


class SQLiteVectorStore(VectorStore):
    """Brute-force cosine search over the embedding column of a SQLiteKnowledgeStore.

    Point it at the same database file as the knowledge store. Every indexed
    row is scored, so results are exact rather than approximate.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the vector store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        init_knowledge_schema(db_path)

    def _load_indexed(self) -> list[KnowledgeEntry]:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {ENTRY_COLUMNS} FROM {TABLE} WHERE embedding IS NOT NULL"
            )
            return [row_to_entry(row) for row in cursor.fetchall()]

    def query(
        self, embedding: list[float], limit: int, max_distance: float
    ) -> list[tuple[KnowledgeEntry, float]]:
        """Search for entries within ``max_distance`` of ``embedding``."""
        entries = [e for e in self._load_indexed() if len(e.embedding or []) == len(embedding)]
        if not entries:
            return []

        query = np.asarray(embedding, dtype=np.float64)
        matrix = np.asarray([e.embedding for e in entries], dtype=np.float64)

        # cos(θ) = (a · b) / (||a|| * ||b||); zero vectors score 0
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        with np.errstate(divide="ignore", invalid="ignore"):
            cosine = np.where(norms > 0, dots / norms, 0.0)
        distances = 1.0 - np.clip(cosine, 0.0, 1.0)

        # Ascending distance, newest entry first among equals
        order = sorted(
            range(len(entries)),
            key=lambda i: (round(float(distances[i]), 12), -entries[i].created_at.timestamp()),
        )
        results = []
        for i in order:
            distance = float(distances[i])
            if distance > max_distance + 1e-12:
                continue
            results.append((entries[i], 1.0 - distance))
            if len(results) >= limit:
                break

        logger.debug("Scored %d indexed entries, %d within distance", len(entries), len(results))
        return results
