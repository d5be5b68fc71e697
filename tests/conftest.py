"""
Shared fixtures for the relevance engine, services and API tests.

Settings are read from the environment at import time, so the required
Supabase values are filled in before any application module is imported.
"""

import os
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

os.environ.setdefault("APP_SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("APP_SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("APP_SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("APP_VECTOR_STORE", "memory")
os.environ.setdefault("APP_EMBEDDING_PROVIDER", "local")

from notes_relevance.core.models.note import Note  # noqa: E402
from notes_relevance.core.repositories.implementations.memory.embedding_repository import (  # noqa: E402
    InMemoryEmbeddingRepository,
)
from notes_relevance.core.repositories.note_repository import NoteRepository  # noqa: E402
from notes_relevance.core.services.embedding_service import EmbeddingProvider  # noqa: E402

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
USER_ID = UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = UUID("22222222-2222-2222-2222-222222222222")


def make_note(
    title="",
    content="",
    tags=None,
    *,
    user_id=USER_ID,
    age_days=30,
    created_days_ago=None,
    note_id=None,
):
    """Build a note last updated ``age_days`` before NOW."""
    updated = NOW - timedelta(days=age_days)
    created = NOW - timedelta(days=created_days_ago if created_days_ago is not None else age_days)
    return Note(
        id=note_id or uuid4(),
        title=title,
        content=content,
        tags=tags or [],
        user_id=user_id,
        created_at=created,
        updated_at=updated,
    )


class FakeNoteRepository(NoteRepository):
    """In-memory note store standing in for Supabase."""

    def __init__(self, notes=None):
        self.notes = list(notes or [])
        self.list_calls = []

    async def get(self, note_id):
        return next((n for n in self.notes if n.id == note_id), None)

    async def get_many(self, note_ids, *, user_id):
        wanted = set(note_ids)
        return [n for n in self.notes if n.id in wanted and n.user_id == user_id]

    async def list(self, *, limit=500, user_id=None):
        self.list_calls.append({"limit": limit, "user_id": user_id})
        owned = [n for n in self.notes if user_id is None or n.user_id == user_id]
        return sorted(owned, key=lambda n: n.last_modified, reverse=True)[:limit]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def sample_notes():
    """A small workspace: two Rust notes, a cooking note and another user's note."""
    return [
        make_note(
            "Rust Guide",
            "Ownership and borrowing rules keep rust programs memory safe.",
            ["rust", "programming"],
            age_days=2,
        ),
        make_note(
            "Borrow checker notes",
            "The borrow checker enforces ownership; lifetimes annotate references in rust code.",
            ["rust"],
            age_days=10,
        ),
        make_note(
            "Sourdough",
            "Feed the starter twice daily. Bake at high temperature with steam.",
            ["cooking"],
            age_days=40,
        ),
        make_note(
            "Rust secrets",
            "Someone else's note about rust.",
            ["rust"],
            user_id=OTHER_USER_ID,
            age_days=1,
        ),
    ]


@pytest.fixture
def note_repo(sample_notes):
    return FakeNoteRepository(sample_notes)


class FixedEmbeddingProvider(EmbeddingProvider):
    """Returns preset vectors per text; unknown text cannot be embedded."""

    kind = "fixed"

    def __init__(self, vectors, dimensions=3):
        super().__init__(dimensions)
        self.vectors = vectors
        self.calls = []

    @property
    def model_name(self):
        return "fixed-test-vectors"

    async def embed(self, text):
        self.calls.append(text)
        return self.vectors.get(text)


@pytest.fixture
def embedding_repo():
    return InMemoryEmbeddingRepository()
