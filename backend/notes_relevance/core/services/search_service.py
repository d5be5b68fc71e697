from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from notes_relevance.config import settings
from notes_relevance.core.relevance import extract_keywords, rank_notes
from notes_relevance.core.schemas.note_search import MatchLabel, NoteSearchPage, NoteSearchResult
from notes_relevance.core.schemas.taxonomy import NoteTaxonomy
from notes_relevance.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.api.v1.schemas.note_search import NoteSearchRequest
    from notes_relevance.core.models.note import Note
    from notes_relevance.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


def build_note_taxonomy(notes: Sequence[Note]) -> NoteTaxonomy:
    """Collect the sorted set of tags used across ``notes``."""
    return NoteTaxonomy(tag_vocab=sorted({tag for note in notes for tag in note.tags}))


class SearchService:
    """Service for searching notes.

    Fetches the user's corpus from the store and ranks it in-process with the
    relevance engine. Keeps application logic (filters, paging) outside the
    transport layer.
    """

    def __init__(self, repo: NoteRepository, corpus_limit: int | None = None) -> None:
        self._repo = repo
        self._corpus_limit = corpus_limit or settings.corpus_limit

    async def load_corpus(self, user_id: UUID) -> Sequence[Note]:
        return await self._repo.list(limit=self._corpus_limit, user_id=user_id)

    async def search_notes(
        self,
        *,
        user_id: UUID,
        request: NoteSearchRequest,
        now: datetime | None = None,
    ) -> NoteSearchPage:
        notes = await self.load_corpus(user_id)
        if request.tag:
            notes = [n for n in notes if request.tag in n.tags]

        ranked = rank_notes(
            notes,
            request.query or "",
            tie_breaker=request.sort_by,
            now=now or datetime.now(UTC),
        )
        logger.debug(
            "Ranked %d of %d notes",
            len(ranked), len(notes),
            extra={"user_id": str(user_id), "sort_by": request.sort_by.value},
        )

        page_size = request.page_size or settings.search_page_size
        total = len(ranked)
        start = (request.page - 1) * page_size
        items = [
            NoteSearchResult(
                id=note.id,
                title=note.title,
                content=note.content,
                tags=list(note.tags),
                user_id=note.user_id,
                created_at=note.created_at,
                updated_at=note.updated_at,
                score=score,
                match_label=MatchLabel.for_score(score),
            )
            for note, score in ranked[start:start + page_size]
        ]
        return NoteSearchPage(
            items=items,
            total=total,
            page=request.page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )

    async def get_note(self, *, note_id: UUID, user_id: UUID) -> Note | None:
        """Return note if it exists and belongs to the user; otherwise None."""
        note = await self._repo.get(note_id)
        if note and note.user_id == user_id:
            return note
        return None

    async def note_keywords(self, *, note_id: UUID, user_id: UUID, limit: int) -> list[str] | None:
        """Return keywords for one of the user's notes, or None if it is not theirs."""
        note = await self.get_note(note_id=note_id, user_id=user_id)
        if not note:
            return None
        corpus = await self.load_corpus(user_id)
        return extract_keywords(note, corpus, limit)

    async def taxonomy(self, *, user_id: UUID) -> NoteTaxonomy:
        return build_note_taxonomy(await self.load_corpus(user_id))
