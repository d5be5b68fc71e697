from __future__ import annotations

from typing import TYPE_CHECKING

from notes_relevance.core.services.embedding_service import embed_note_chunks
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from uuid import UUID

    from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
    from notes_relevance.core.services.embedding_service import EmbeddingProvider


async def generate_and_store_note_embeddings(
    *,
    note_id: UUID,
    user_id: UUID,
    title: str | None,
    content: str | None,
    provider: EmbeddingProvider,
    repo: EmbeddingRepository,
) -> int:
    """Embed a note's chunks and replace its stored embeddings as background work.

    Returns the number of chunks written. No-ops (and returns 0) on errors so a
    failing provider or store never surfaces in the request that scheduled it.
    """
    try:
        chunks, total = await embed_note_chunks(
            note_id=note_id,
            user_id=user_id,
            title=title,
            content=content,
            provider=provider,
        )
        if total == 0:
            logger.warning("No text content to embed for note %s", note_id)

        stored = await repo.replace_note_embeddings(note_id=note_id, user_id=user_id, chunks=chunks)
        logger.info(
            "Generated %d embeddings out of %d chunks for note %s",
            stored, total, note_id,
            extra={"provider": provider.kind},
        )
        return stored
    except Exception as err:  # pragma: no cover - network/db errors
        logger.error("Embedding job failed for note %s: %s", note_id, err)
        return 0
