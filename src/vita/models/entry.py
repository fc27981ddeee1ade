"""Knowledge entry data models."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(UTC)


class EntryDraft(BaseModel):
    """Authored or scraped content that has not been stored yet."""

    title: str
    content: str
    source_url: str = ""


class EntryUpdate(BaseModel):
    """Partial update for a knowledge entry. Unset fields are left as they are."""

    title: str | None = None
    content: str | None = None
    source_url: str | None = None


class KnowledgeEntry(BaseModel):
    """A piece of groundable knowledge, optionally indexed with an embedding."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    content: str
    source_url: str = ""
    embedding: list[float] | None = None  # None = not indexed yet
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_indexed(self) -> bool:
        return self.embedding is not None
