from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.core.models.note import Note


class NoteRepository(ABC):
    """Read-side interface to the note store.

    The relevance engine consumes the corpus through these calls only; note
    writes belong to the store's own API. Implementations perform I/O and
    therefore expose async methods.
    """

    @abstractmethod
    async def get(self, note_id: UUID) -> Note | None:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def get_many(self, note_ids: Sequence[UUID], *, user_id: UUID) -> Sequence[Note]:  # pragma: no cover
        """Fetch the user's notes among ``note_ids``; unknown ids are skipped."""

    @abstractmethod
    async def list(self, *, limit: int = 500, user_id: UUID | None = None) -> Sequence[Note]:  # pragma: no cover
        """Return most recent notes, ordered by update time descending.

        Args:
            limit: Maximum number of notes to return
            user_id: Optional user ID to filter notes by owner
        """
