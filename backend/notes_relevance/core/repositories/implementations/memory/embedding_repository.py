from __future__ import annotations

from typing import TYPE_CHECKING

from notes_relevance.core.relevance import cosine_similarity
from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
from notes_relevance.core.schemas.retrieval import VectorMatch
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.core.schemas.retrieval import EmbeddingChunk


class InMemoryEmbeddingRepository(EmbeddingRepository):
    """Process-local chunk store for deployments without a vector database.

    Matching is a linear scan with cosine similarity, mirroring what the
    `match_embeddings` RPC computes in Postgres.
    """

    def __init__(self) -> None:
        self._chunks: dict[tuple[UUID, UUID], list[EmbeddingChunk]] = {}

    async def replace_note_embeddings(
        self,
        *,
        note_id: UUID,
        user_id: UUID,
        chunks: Sequence[EmbeddingChunk],
    ) -> int:
        self._chunks[(user_id, note_id)] = list(chunks)
        logger.debug("Stored %d in-memory embeddings for note %s", len(chunks), note_id)
        return len(chunks)

    async def delete_note_embeddings(self, *, note_id: UUID, user_id: UUID) -> None:
        self._chunks.pop((user_id, note_id), None)

    async def match_embeddings(
        self,
        *,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
        user_id: UUID,
    ) -> Sequence[VectorMatch]:
        candidates = [
            chunk
            for (owner, _), chunks in self._chunks.items()
            if owner == user_id
            for chunk in chunks
        ]

        matches: list[VectorMatch] = []
        for chunk in candidates:
            similarity = cosine_similarity(query_embedding, chunk.embedding)
            if similarity > match_threshold:
                matches.append(
                    VectorMatch(note_id=chunk.note_id, content_chunk=chunk.content_chunk, similarity=similarity)
                )
        matches.sort(key=lambda m: m.similarity, reverse=True)
        return matches[:match_count]
