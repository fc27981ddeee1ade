"""Result data models for Vita queries."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vita.models.entry import KnowledgeEntry


class RagSource(BaseModel):
    """Public summary of one retrieved entry, as reported back to callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    similarity: float
    source_url: str


class SimilarityResult(BaseModel):
    """A knowledge entry matched by a query, with its cosine similarity."""

    entry: KnowledgeEntry
    similarity: float = Field(ge=0.0, le=1.0)

    def summary(self) -> RagSource:
        return RagSource(
            id=self.entry.id,
            title=self.entry.title,
            similarity=self.similarity,
            source_url=self.entry.source_url,
        )


class ChatAnswer(BaseModel):
    """Full (non-streamed) response to a question."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    rag_results: list[RagSource]
    threshold: float
    total_results: int
    temperature: float
    has_results: bool
