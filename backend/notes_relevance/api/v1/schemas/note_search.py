from __future__ import annotations

from pydantic import Field, field_validator

from notes_relevance.core.models.base import AppBaseModel
from notes_relevance.core.relevance import SortKey


class NoteSearchRequest(AppBaseModel):
    query: str | None = Field(default=None, description="Keyword query; empty lists every note")
    tag: str | None = Field(default=None, description="Only return notes carrying this tag")
    sort_by: SortKey = Field(
        default=SortKey.UPDATED,
        description="Order among notes with equal relevance",
    )
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1, le=200)

    @field_validator("tag")
    @classmethod
    def normalize_tag(cls, v: str | None) -> str | None:
        if v is None:
            return v
        stripped = v.strip()
        return stripped or None
