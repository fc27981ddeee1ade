"""SQLite knowledge entry store implementation."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from vita.models import KnowledgeEntry
from vita.stores.base import KnowledgeStore

TABLE = "knowledge_entries"

ENTRY_COLUMNS = "id, title, content, source_url, embedding, created_at, updated_at"


def format_timestamp(value: datetime) -> str:
    # Fixed precision keeps ISO strings sortable as text
    return value.isoformat(timespec="microseconds")


def init_knowledge_schema(db_path: str) -> None:
    """Create the knowledge table if it doesn't exist."""
    with sqlite3.connect(db_path) as conn:
        conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {TABLE} (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                source_url TEXT NOT NULL,
                embedding TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        conn.execute(f"CREATE INDEX IF NOT EXISTS idx_entries_created ON {TABLE}(created_at)")
        conn.commit()


def row_to_entry(row: tuple) -> KnowledgeEntry:
    return KnowledgeEntry(
        id=row[0],
        title=row[1],
        content=row[2],
        source_url=row[3],
        embedding=json.loads(row[4]) if row[4] is not None else None,
        created_at=datetime.fromisoformat(row[5]),
        updated_at=datetime.fromisoformat(row[6]),
    )


class SQLiteKnowledgeStore(KnowledgeStore):
    """SQLite-based knowledge entry store.

    Embeddings live in the same row as the entry, serialized as JSON, so an
    entry and its embedding are always written by a single statement.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        init_knowledge_schema(db_path)

    def put(self, entry: KnowledgeEntry) -> None:
        """Store an entry, overwriting if exists."""
        embedding = json.dumps(entry.embedding) if entry.embedding is not None else None
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                f"""
                INSERT OR REPLACE INTO {TABLE} ({ENTRY_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.title,
                    entry.content,
                    entry.source_url,
                    embedding,
                    format_timestamp(entry.created_at),
                    format_timestamp(entry.updated_at),
                ),
            )
            conn.commit()

    def get(self, entry_id: str) -> KnowledgeEntry | None:
        """Retrieve an entry by ID."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {ENTRY_COLUMNS} FROM {TABLE} WHERE id = ?",
                (entry_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return row_to_entry(row)

    def list_entries(self) -> list[KnowledgeEntry]:
        """List all entries, newest first."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {ENTRY_COLUMNS} FROM {TABLE} ORDER BY created_at DESC, rowid DESC"
            )
            return [row_to_entry(row) for row in cursor.fetchall()]

    def set_embedding(self, entry_id: str, embedding: list[float] | None) -> bool:
        """Replace the embedding column of one entry."""
        value = json.dumps(embedding) if embedding is not None else None
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"UPDATE {TABLE} SET embedding = ? WHERE id = ?",
                (value, entry_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete(self, entry_id: str) -> bool:
        """Delete an entry by ID."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"DELETE FROM {TABLE} WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0

    def count_entries(self) -> int:
        """Count the total number of entries in the store."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"SELECT COUNT(id) FROM {TABLE}")
            count = cursor.fetchone()
            return count[0] if count else 0

    def count_indexed(self) -> int:
        """Count entries that have an embedding."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"SELECT COUNT(id) FROM {TABLE} WHERE embedding IS NOT NULL")
            count = cursor.fetchone()
            return count[0] if count else 0
