from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.core.schemas.retrieval import EmbeddingChunk, VectorMatch


class EmbeddingRepository(ABC):
    """Storage and nearest-neighbour lookup for note chunk embeddings."""

    @abstractmethod
    async def replace_note_embeddings(
        self,
        *,
        note_id: UUID,
        user_id: UUID,
        chunks: Sequence[EmbeddingChunk],
    ) -> int:  # pragma: no cover
        """Drop the note's existing chunks, store ``chunks`` and return how many were written."""

    @abstractmethod
    async def delete_note_embeddings(self, *, note_id: UUID, user_id: UUID) -> None:  # pragma: no cover
        """Remove every stored chunk of the note."""

    @abstractmethod
    async def match_embeddings(
        self,
        *,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
        user_id: UUID,
    ) -> Sequence[VectorMatch]:  # pragma: no cover
        """Return up to ``match_count`` chunks with similarity above the threshold, best first."""
