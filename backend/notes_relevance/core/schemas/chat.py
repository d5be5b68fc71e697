from __future__ import annotations

from pydantic import Field

from notes_relevance.core.models.base import AppBaseModel
from notes_relevance.core.schemas.retrieval import SourceNote  # noqa: TCH001


class ChatDebug(AppBaseModel):
    total_matches: int
    context_length: int
    has_context: bool
    embedding_model: str
    response_model: str


class ChatAnswer(AppBaseModel):
    """Assistant reply grounded in the user's notes."""

    response: str
    source_notes: list[SourceNote] = Field(default_factory=list)
    debug: ChatDebug
