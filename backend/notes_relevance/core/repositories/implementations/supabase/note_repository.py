from __future__ import annotations

from typing import TYPE_CHECKING, Any

from notes_relevance.core.models.note import Note
from notes_relevance.core.repositories.note_repository import NoteRepository
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from supabase import Client


class SupabaseNoteRepository(NoteRepository):
    """Supabase implementation of the NoteRepository.

    Reads the `notes` table through PostgREST. Only the columns the relevance
    engine needs are selected; RLS on the request client scopes rows to the
    caller.
    """

    TABLE_NAME = "notes"
    COLUMNS = "id,title,content,tags,user_id,created_at,updated_at"

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    async def get(self, note_id: UUID) -> Note | None:
        resp = await self._run(
            lambda: self._client.table(self.TABLE_NAME)
            .select(self.COLUMNS)
            .eq("id", str(note_id))
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_note(items[0])

    async def get_many(self, note_ids: Sequence[UUID], *, user_id: UUID) -> Sequence[Note]:
        if not note_ids:
            return []
        ids = [str(i) for i in note_ids]
        resp = await self._run(
            lambda: self._client.table(self.TABLE_NAME)
            .select(self.COLUMNS)
            .in_("id", ids)
            .eq("user_id", str(user_id))
            .execute()
        )
        return [self._row_to_note(r) for r in resp.data or []]

    async def list(self, *, limit: int = 500, user_id: UUID | None = None) -> Sequence[Note]:
        def _query():
            q = self._client.table(self.TABLE_NAME).select(self.COLUMNS)
            if user_id is not None:
                q = q.eq("user_id", str(user_id))
            return (
                q
                .order("updated_at", desc=True)
                .limit(limit)
                .execute()
            )

        resp = await self._run(_query)
        items = resp.data or []
        logger.debug("Fetched %d notes for corpus", len(items))
        return [self._row_to_note(i) for i in items]

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        return await asyncio.to_thread(func)

    @staticmethod
    def _row_to_note(row: dict[str, Any]) -> Note:
        # Keep only model fields; the table may carry extra columns
        normalized = {k: v for k, v in row.items() if k in Note.model_fields}
        return Note.model_validate(normalized)
