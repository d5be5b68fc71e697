from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from notes_relevance.config import settings
from notes_relevance.core.schemas.retrieval import RetrievedContext, SourceNote
from notes_relevance.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.config import Settings
    from notes_relevance.core.models.note import Note
    from notes_relevance.core.repositories.embedding_repository import EmbeddingRepository
    from notes_relevance.core.repositories.note_repository import NoteRepository
    from notes_relevance.core.schemas.retrieval import VectorMatch
    from notes_relevance.core.services.embedding_service import EmbeddingProvider

logger = get_logger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"
CHUNK_SEPARATOR = "\n...\n"


def assemble_context(
    matches: Sequence[VectorMatch],
    notes: Sequence[Note],
    *,
    max_chunks_per_note: int = 3,
    max_source_notes: int = 4,
) -> RetrievedContext:
    """Group chunk matches by note and build the ordered prompt context.

    A note's relevance is the mean similarity of its matched chunks; its best
    ``max_chunks_per_note`` chunks go into the context. Matches whose note is
    not in ``notes`` (deleted, or owned by someone else) are ignored.
    """
    by_note: dict[UUID, list[VectorMatch]] = defaultdict(list)
    for match in matches:
        by_note[match.note_id].append(match)

    ranked: list[tuple[Note, float, str]] = []
    for note in notes:
        note_matches = by_note.get(note.id)
        if not note_matches:
            continue
        average = sum(m.similarity for m in note_matches) / len(note_matches)
        best = sorted(note_matches, key=lambda m: m.similarity, reverse=True)[:max_chunks_per_note]
        chunks = CHUNK_SEPARATOR.join(m.content_chunk for m in best)
        ranked.append((note, average, f'Note: "{note.title}"\nContent: {chunks}'))

    ranked.sort(key=lambda item: item[1], reverse=True)
    return RetrievedContext(
        context=CONTEXT_SEPARATOR.join(text for _, _, text in ranked),
        source_notes=[
            SourceNote(id=note.id, title=note.title, similarity=round(similarity, 2))
            for note, similarity, _ in ranked[:max_source_notes]
        ],
        total_matches=len(matches),
    )


class RetrievalService:
    """Finds the notes most relevant to a chat message.

    The message is embedded with the configured provider and matched against
    stored chunk embeddings; the matching notes are then fetched from the
    note store to build the prompt context.
    """

    def __init__(
        self,
        note_repo: NoteRepository,
        embedding_repo: EmbeddingRepository,
        provider: EmbeddingProvider,
        config: Settings | None = None,
    ) -> None:
        self._note_repo = note_repo
        self._embedding_repo = embedding_repo
        self._provider = provider
        self._config = config or settings

    @property
    def provider(self) -> EmbeddingProvider:
        return self._provider

    async def retrieve(self, *, user_id: UUID, message: str) -> RetrievedContext:
        query_embedding = await self._provider.embed(message)
        if not query_embedding:
            logger.warning("Could not embed chat message; answering without context")
            return RetrievedContext()

        matches = await self._embedding_repo.match_embeddings(
            query_embedding=query_embedding,
            match_threshold=self._config.match_threshold,
            match_count=self._config.match_count,
            user_id=user_id,
        )
        logger.info("Found %d matching chunks", len(matches), extra={"user_id": str(user_id)})
        if not matches:
            return RetrievedContext()

        note_ids = list(dict.fromkeys(m.note_id for m in matches))
        notes = await self._note_repo.get_many(note_ids, user_id=user_id)
        retrieved = assemble_context(
            matches,
            notes,
            max_chunks_per_note=self._config.max_chunks_per_note,
            max_source_notes=self._config.max_source_notes,
        )
        logger.debug(
            "Created context from %d notes, total length: %d chars",
            len(retrieved.source_notes), len(retrieved.context),
        )
        return retrieved
