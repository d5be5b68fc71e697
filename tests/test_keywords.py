import pytest

from conftest import make_note
from notes_relevance.core.relevance import extract_keywords


@pytest.fixture
def ownership_note():
    return make_note("Rust ownership", "ownership ownership borrowing")


@pytest.fixture
def corpus(ownership_note):
    return [
        ownership_note,
        make_note("Python ownership", "python rules"),
        make_note("Cooking", "bread"),
    ]


class TestExtractKeywords:
    def test_ranks_by_tf_idf(self, ownership_note, corpus):
        # ownership: 3/5 * ln(3/2) beats rust and borrowing: 1/5 * ln(3/1)
        assert extract_keywords(ownership_note, corpus) == ["ownership", "rust", "borrowing"]

    def test_respects_limit(self, ownership_note, corpus):
        assert extract_keywords(ownership_note, corpus, limit=2) == ["ownership", "rust"]
        assert extract_keywords(ownership_note, corpus, limit=0) == []

    def test_count_never_exceeds_limit(self, corpus):
        long_note = make_note("", "alpha bravo charlie delta echo foxtrot golf hotel india juliet")
        for limit in range(0, 12):
            assert len(extract_keywords(long_note, corpus + [long_note], limit)) <= limit

    def test_equal_scores_keep_first_seen_order(self, ownership_note):
        # With an empty corpus every idf is ln(1/1) = 0
        assert extract_keywords(ownership_note, []) == ["rust", "ownership", "borrowing"]

    def test_document_frequency_uses_substring_containment(self):
        note = make_note("", "rust crate")
        corpus = [note, make_note("", "a trusty old bike"), make_note("", "crates of apples")]
        # "rust" and "crate" each appear (as substrings) in two of three notes
        assert extract_keywords(note, corpus) == ["rust", "crate"]

    def test_no_surviving_tokens_gives_empty_result(self, corpus):
        note = make_note("The", "and or but ... it is")
        assert extract_keywords(note, corpus) == []

    def test_negative_limit_is_rejected(self, ownership_note, corpus):
        with pytest.raises(ValueError, match="limit"):
            extract_keywords(ownership_note, corpus, limit=-1)

    def test_is_deterministic(self, ownership_note, corpus):
        assert extract_keywords(ownership_note, corpus) == extract_keywords(ownership_note, corpus)
