from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from enum import Enum
from uuid import UUID  # noqa: TCH003

from pydantic import Field

from notes_relevance.core.models.base import AppBaseModel


class MatchLabel(str, Enum):
    """Coarse badge shown next to a ranked result."""

    EXACT = "exact"
    HIGH = "high"
    MATCH = "match"

    @classmethod
    def for_score(cls, score: float) -> MatchLabel | None:
        if score <= 0:
            return None
        if score > 20:
            return cls.EXACT
        if score > 10:
            return cls.HIGH
        return cls.MATCH


class NoteSearchResult(AppBaseModel):
    """Typed search result carrying the relevance score."""

    id: UUID
    title: str
    content: str
    tags: list[str]
    user_id: UUID
    created_at: datetime
    updated_at: datetime | None
    score: float = Field(ge=0)
    match_label: MatchLabel | None = None


class NoteSearchPage(AppBaseModel):
    items: list[NoteSearchResult]
    total: int
    page: int
    page_size: int
    total_pages: int
