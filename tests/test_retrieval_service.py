import pytest

from conftest import OTHER_USER_ID, USER_ID, FakeNoteRepository, FixedEmbeddingProvider, make_note
from notes_relevance.core.schemas.retrieval import EmbeddingChunk, VectorMatch
from notes_relevance.core.services.retrieval_service import RetrievalService, assemble_context

QUESTION = "How does ownership work?"


def match(note, chunk, similarity):
    return VectorMatch(note_id=note.id, content_chunk=chunk, similarity=similarity)


async def store(repo, note, *chunks):
    await repo.replace_note_embeddings(
        note_id=note.id,
        user_id=note.user_id,
        chunks=[
            EmbeddingChunk(note_id=note.id, user_id=note.user_id, chunk_index=i, content_chunk=text, embedding=vector)
            for i, (text, vector) in enumerate(chunks)
        ],
    )


class TestAssembleContext:
    def test_groups_chunks_and_orders_notes_by_average_similarity(self):
        rust = make_note("Rust")
        go = make_note("Go")
        matches = [
            match(go, "goroutines", 0.9),
            match(rust, "ownership", 0.8),
            match(rust, "borrowing", 0.7),
            match(go, "channels", 0.1),
        ]
        retrieved = assemble_context(matches, [go, rust])

        assert [s.title for s in retrieved.source_notes] == ["Rust", "Go"]
        assert [s.similarity for s in retrieved.source_notes] == [0.75, 0.5]
        assert retrieved.context == (
            'Note: "Rust"\nContent: ownership\n...\nborrowing'
            "\n\n---\n\n"
            'Note: "Go"\nContent: goroutines\n...\nchannels'
        )
        assert retrieved.total_matches == 4
        assert retrieved.has_context

    def test_keeps_best_chunks_per_note_but_averages_all(self):
        note = make_note("Long note")
        matches = [match(note, f"chunk {s}", s) for s in (0.2, 0.9, 0.5, 0.8)]
        retrieved = assemble_context(matches, [note], max_chunks_per_note=3)
        assert retrieved.context == 'Note: "Long note"\nContent: chunk 0.9\n...\nchunk 0.8\n...\nchunk 0.5'
        assert retrieved.source_notes[0].similarity == 0.6

    def test_source_notes_are_capped_and_rounded(self):
        notes = [make_note(f"Note {i}") for i in range(5)]
        matches = [match(n, "text", 0.91234 - i * 0.1) for i, n in enumerate(notes)]
        retrieved = assemble_context(matches, notes, max_source_notes=4)
        assert [s.title for s in retrieved.source_notes] == ["Note 0", "Note 1", "Note 2", "Note 3"]
        assert retrieved.source_notes[0].similarity == 0.91
        assert retrieved.context.count('Note: "') == 5

    def test_matches_without_a_readable_note_are_ignored(self):
        known = make_note("Known")
        ghost = make_note("Ghost")
        retrieved = assemble_context([match(ghost, "gone", 0.9), match(known, "here", 0.4)], [known])
        assert [s.title for s in retrieved.source_notes] == ["Known"]
        assert "gone" not in retrieved.context
        assert retrieved.total_matches == 2

    def test_no_matches(self):
        retrieved = assemble_context([], [])
        assert retrieved.context == ""
        assert retrieved.source_notes == []
        assert not retrieved.has_context


class TestRetrievalService:
    @pytest.fixture
    def notes(self):
        return {
            "rust": make_note("Rust Guide", "ownership"),
            "bread": make_note("Sourdough", "starter"),
            "foreign": make_note("Secrets", "ownership", user_id=OTHER_USER_ID),
        }

    @pytest.fixture
    def provider(self):
        return FixedEmbeddingProvider({QUESTION: [1.0, 0.0, 0.0]})

    async def test_retrieves_users_best_notes(self, notes, provider, embedding_repo):
        await store(embedding_repo, notes["rust"], ("owners and moves", [1.0, 0.0, 0.0]), ("borrowing", [0.8, 0.6, 0.0]))
        await store(embedding_repo, notes["bread"], ("feed the starter", [0.6, 0.8, 0.0]), ("bake", [0.0, 1.0, 0.0]))
        await store(embedding_repo, notes["foreign"], ("their ownership notes", [1.0, 0.0, 0.0]))
        service = RetrievalService(FakeNoteRepository(notes.values()), embedding_repo, provider)

        retrieved = await service.retrieve(user_id=USER_ID, message=QUESTION)

        assert [(s.title, s.similarity) for s in retrieved.source_notes] == [("Rust Guide", 0.9), ("Sourdough", 0.6)]
        assert retrieved.total_matches == 3
        assert retrieved.context.startswith('Note: "Rust Guide"\nContent: owners and moves\n...\nborrowing')
        assert "their ownership notes" not in retrieved.context
        assert provider.calls == [QUESTION]

    async def test_no_stored_embeddings_gives_empty_context(self, notes, provider, embedding_repo):
        service = RetrievalService(FakeNoteRepository(notes.values()), embedding_repo, provider)
        retrieved = await service.retrieve(user_id=USER_ID, message=QUESTION)
        assert not retrieved.has_context
        assert retrieved.source_notes == []

    async def test_unembeddable_message_gives_empty_context(self, notes, embedding_repo):
        await store(embedding_repo, notes["rust"], ("owners and moves", [1.0, 0.0, 0.0]))
        service = RetrievalService(FakeNoteRepository(notes.values()), embedding_repo, FixedEmbeddingProvider({}))
        retrieved = await service.retrieve(user_id=USER_ID, message=QUESTION)
        assert not retrieved.has_context

    async def test_chunks_of_deleted_notes_are_skipped(self, provider, embedding_repo):
        deleted = make_note("Deleted")
        await store(embedding_repo, deleted, ("stale chunk", [1.0, 0.0, 0.0]))
        service = RetrievalService(FakeNoteRepository(), embedding_repo, provider)
        retrieved = await service.retrieve(user_id=USER_ID, message=QUESTION)
        assert retrieved.source_notes == []
        assert retrieved.total_matches == 1
        assert not retrieved.has_context

    def test_exposes_provider(self, provider, embedding_repo):
        service = RetrievalService(FakeNoteRepository(), embedding_repo, provider)
        assert service.provider is provider
