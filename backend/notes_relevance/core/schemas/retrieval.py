from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from pydantic import Field

from notes_relevance.core.models.base import AppBaseModel


class EmbeddingChunk(AppBaseModel):
    """One embedded slice of a note, as stored in `notes_embeddings`."""

    note_id: UUID
    user_id: UUID
    chunk_index: int = Field(ge=0)
    content_chunk: str
    embedding: list[float]


class VectorMatch(AppBaseModel):
    """A chunk returned by the vector-match interface."""

    note_id: UUID
    content_chunk: str
    similarity: float


class SourceNote(AppBaseModel):
    id: UUID
    title: str
    similarity: float


class RetrievedContext(AppBaseModel):
    """Prompt context assembled from the best matching notes."""

    context: str = ""
    source_notes: list[SourceNote] = Field(default_factory=list)
    total_matches: int = 0

    @property
    def has_context(self) -> bool:
        return bool(self.context)
