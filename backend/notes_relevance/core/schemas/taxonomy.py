from __future__ import annotations

from pydantic import Field

from notes_relevance.core.models.base import AppBaseModel


class NoteTaxonomy(AppBaseModel):
    """Aggregated vocabulary for notes within a user's workspace.

    - tag_vocab: unique tags observed across the user's notes, sorted
    """

    tag_vocab: list[str] = Field(default_factory=list)
