from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from notes_relevance.core.models.base import AppBaseModel


class AuthUser(AppBaseModel):
    """Caller identity resolved from the Supabase JWT; scopes every corpus fetch."""

    id: UUID
    email: str
    role: str | None = None
