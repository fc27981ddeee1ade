"""SQLite conversation store implementation."""

import sqlite3
from datetime import datetime
from pathlib import Path

from vita.models import Conversation, ConversationSummary, Message, Sender
from vita.models.entry import utc_now
from vita.stores.base import ConversationStore
from vita.stores.sqlite_knowledge import format_timestamp


def _row_to_conversation(row: tuple) -> Conversation:
    return Conversation(
        id=row[0],
        owner_id=row[1],
        title=row[2],
        created_at=datetime.fromisoformat(row[3]),
        updated_at=datetime.fromisoformat(row[4]),
    )


class SQLiteConversationStore(ConversationStore):
    """SQLite-based conversation store.

    Messages reference their conversation with ON DELETE CASCADE, so deleting
    a conversation removes its messages in the same statement.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS conversations (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS messages (
                    id TEXT PRIMARY KEY,
                    conversation_id TEXT NOT NULL
                        REFERENCES conversations(id) ON DELETE CASCADE,
                    sender TEXT NOT NULL,
                    content TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_conv_owner ON conversations(owner_id)")
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_msg_conv ON messages(conversation_id, created_at)"
            )
            conn.commit()

    def create_conversation(self, conversation: Conversation) -> None:
        """Store a new conversation."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO conversations (id, owner_id, title, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    conversation.id,
                    conversation.owner_id,
                    conversation.title,
                    format_timestamp(conversation.created_at),
                    format_timestamp(conversation.updated_at),
                ),
            )
            conn.commit()

    def get_conversation(self, conversation_id: str, owner_id: str) -> Conversation | None:
        """Retrieve a conversation owned by ``owner_id``."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, owner_id, title, created_at, updated_at
                FROM conversations WHERE id = ? AND owner_id = ?
                """,
                (conversation_id, owner_id),
            )
            row = cursor.fetchone()
            return _row_to_conversation(row) if row else None

    def list_conversations(
        self, owner_id: str, title_contains: str | None = None
    ) -> list[ConversationSummary]:
        """List an owner's conversations with message counts, most recently updated first."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                SELECT c.id, c.owner_id, c.title, c.created_at, c.updated_at, COUNT(m.id)
                FROM conversations c
                LEFT JOIN messages m ON m.conversation_id = c.id
                WHERE c.owner_id = ?
                GROUP BY c.id
                ORDER BY c.updated_at DESC, c.rowid DESC
                """,
                (owner_id,),
            )
            rows = cursor.fetchall()

        summaries = [
            ConversationSummary(conversation=_row_to_conversation(row[:5]), message_count=row[5])
            for row in rows
        ]
        if title_contains is not None:
            # SQLite's LIKE only folds ASCII; casefold handles the rest
            needle = title_contains.casefold()
            summaries = [s for s in summaries if needle in s.conversation.title.casefold()]
        return summaries

    def update_title(self, conversation_id: str, owner_id: str, title: str) -> Conversation | None:
        """Rename a conversation and bump its updated_at."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE conversations SET title = ?, updated_at = ?
                WHERE id = ? AND owner_id = ?
                """,
                (title, format_timestamp(utc_now()), conversation_id, owner_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        return self.get_conversation(conversation_id, owner_id)

    def delete_conversation(self, conversation_id: str, owner_id: str) -> bool:
        """Delete a conversation and all of its messages."""
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM conversations WHERE id = ? AND owner_id = ?",
                (conversation_id, owner_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def add_message(self, message: Message) -> None:
        """Append a message and bump its conversation's updated_at."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO messages (id, conversation_id, sender, content, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    message.id,
                    message.conversation_id,
                    message.sender.value,
                    message.content,
                    format_timestamp(message.created_at),
                ),
            )
            conn.execute(
                "UPDATE conversations SET updated_at = ? WHERE id = ?",
                (format_timestamp(message.created_at), message.conversation_id),
            )
            conn.commit()

    def list_messages(self, conversation_id: str) -> list[Message]:
        """List a conversation's messages in chronological order."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, conversation_id, sender, content, created_at
                FROM messages WHERE conversation_id = ?
                ORDER BY created_at ASC, rowid ASC
                """,
                (conversation_id,),
            )
            return [
                Message(
                    id=row[0],
                    conversation_id=row[1],
                    sender=Sender(row[2]),
                    content=row[3],
                    created_at=datetime.fromisoformat(row[4]),
                )
                for row in cursor.fetchall()
            ]
