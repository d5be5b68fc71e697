from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
from notes_relevance.core.schemas.retrieval import VectorMatch
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from supabase import Client

    from notes_relevance.core.schemas.retrieval import EmbeddingChunk


class SupabaseEmbeddingRepository(EmbeddingRepository):
    """pgvector-backed chunk store.

    Rows live in `notes_embeddings`; similarity search goes through the
    `match_embeddings` RPC, which returns `1 - cosine distance` per chunk.
    """

    TABLE_NAME = "notes_embeddings"
    MATCH_RPC = "match_embeddings"

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    async def replace_note_embeddings(
        self,
        *,
        note_id: UUID,
        user_id: UUID,
        chunks: Sequence[EmbeddingChunk],
    ) -> int:
        await self.delete_note_embeddings(note_id=note_id, user_id=user_id)
        if not chunks:
            logger.warning("No embeddings to store for note %s", note_id)
            return 0

        rows = [self._chunk_to_row(c) for c in chunks]
        resp = await asyncio.to_thread(
            lambda: self._client.table(self.TABLE_NAME)
            .insert(rows)
            .execute()
        )
        inserted = len(resp.data or [])
        logger.info("Stored %d embeddings for note %s", inserted, note_id)
        return inserted

    async def delete_note_embeddings(self, *, note_id: UUID, user_id: UUID) -> None:
        await asyncio.to_thread(
            lambda: self._client.table(self.TABLE_NAME)
            .delete()
            .eq("note_id", str(note_id))
            .eq("user_id", str(user_id))
            .execute()
        )

    async def match_embeddings(
        self,
        *,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
        user_id: UUID,
    ) -> Sequence[VectorMatch]:
        params: dict[str, Any] = {
            "query_embedding": list(query_embedding),
            "match_threshold": match_threshold,
            "match_count": match_count,
            "user_id": str(user_id),
        }
        resp = await asyncio.to_thread(
            lambda: self._client.rpc(self.MATCH_RPC, params=params).execute()
        )
        rows: list[dict[str, Any]] = resp.data or []
        return [VectorMatch.model_validate(r) for r in rows]

    @staticmethod
    def format_vector(vector: Sequence[float]) -> str:
        """Serialize a vector the way pgvector parses it: '[0.1,0.2,0.3]'."""
        return "[" + ",".join(repr(float(v)) for v in vector) + "]"

    @classmethod
    def _chunk_to_row(cls, chunk: EmbeddingChunk) -> dict[str, Any]:
        return {
            "note_id": str(chunk.note_id),
            "user_id": str(chunk.user_id),
            "content_chunk": chunk.content_chunk,
            "embedding": cls.format_vector(chunk.embedding),
            "chunk_index": chunk.chunk_index,
        }
