from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import TimestampedModel


class Note(TimestampedModel):
    """Note as read from the note store.

    The relevance engine receives notes by value and never mutates them, so
    instances are frozen.
    """

    id: UUID = Field(default_factory=uuid4, description="Unique note identifier")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note content")
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")
    user_id: UUID = Field(default_factory=uuid4, description="Owner of the note")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "title": "Rust Guide",
                    "content": "Ownership, borrowing and lifetimes explained with examples.",
                    "tags": ["rust", "programming"],
                    "user_id": str(uuid4()),
                }
            ]
        },
    }

    @field_validator("title", "content", mode="before")
    @classmethod
    def coerce_missing_text(cls, v: str | None) -> str:
        # The store keeps empty fields as NULL
        return v if v is not None else ""

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_missing_tags(cls, v: list[str] | None) -> list[str]:
        return v if v is not None else []

    @property
    def last_modified(self) -> datetime:
        """Timestamp used for recency: updated_at, or created_at if never updated."""
        return self.updated_at or self.created_at

    @property
    def text(self) -> str:
        """Title and content joined the way keyword and similarity passes read them."""
        return f"{self.title} {self.content}"
