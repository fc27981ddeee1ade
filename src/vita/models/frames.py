"""Streaming envelope frames.

A streamed answer is always delivered as one ``MetadataFrame``, then any
number of ``ContentFrame`` in arrival order, then exactly one terminal frame
(``EndFrame`` on success, ``ErrorFrame`` if generation failed mid-stream).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vita.models.results import RagSource


class _Frame(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_sse(self) -> str:
        """Render as a Server-Sent Events ``data:`` record."""
        return f"data: {self.to_json()}\n\n"


class MetadataFrame(_Frame):
    type: Literal["metadata"] = "metadata"
    rag_results: list[RagSource]
    threshold: float
    total_results: int
    temperature: float


class ContentFrame(_Frame):
    type: Literal["content"] = "content"
    text: str


class EndFrame(_Frame):
    type: Literal["end"] = "end"


class ErrorFrame(_Frame):
    type: Literal["error"] = "error"
    stage: str
    message: str


StreamFrame = MetadataFrame | ContentFrame | EndFrame | ErrorFrame
