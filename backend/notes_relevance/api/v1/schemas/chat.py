from __future__ import annotations

from pydantic import Field, field_validator

from notes_relevance.core.models.base import AppBaseModel


class ChatRequest(AppBaseModel):
    """User question for the notes assistant."""

    message: str = Field(..., min_length=1, max_length=4000, description="Question answered from the user's notes")

    @field_validator("message")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Message is required")
        return stripped
