from datetime import timedelta

import pytest

from conftest import NOW, make_note
from notes_relevance.core.relevance import SortKey, rank_notes, score_relevance, sort_notes


class TestScoreRelevance:
    def test_title_and_exact_tag_example(self):
        note = make_note("Rust Guide", "...", ["rust"])
        assert score_relevance(note, "rust", NOW) == 25

    def test_exact_title_beats_substring_beats_nothing(self):
        exact = make_note("Rust")
        partial = make_note("Rust guide")
        unrelated = make_note("Cooking")

        exact_score = score_relevance(exact, "rust", NOW)
        partial_score = score_relevance(partial, "rust", NOW)
        assert exact_score == 30
        assert partial_score == 10
        assert score_relevance(unrelated, "rust", NOW) == 0
        assert exact_score > partial_score > 0

    def test_query_is_trimmed_and_case_insensitive(self):
        note = make_note("Rust")
        assert score_relevance(note, "  RUST ", NOW) == 30

    def test_every_containing_tag_counts(self):
        note = make_note(tags=["rust", "Rustlang", "go"])
        # two containing tags (+5 each) plus one exact tag (+10)
        assert score_relevance(note, "rust", NOW) == 20

    def test_content_exact_and_partial_words(self):
        note = make_note(content="rust rusty trust Rust.")
        # rust (+3), rusty (+1), trust (+1), "rust." (+1)
        assert score_relevance(note, "rust", NOW) == 6

    def test_each_query_word_is_matched_separately(self):
        note = make_note("Rust Guide", "a guide to rust")
        # title contains (+10) and equals (+20), "rust" (+3), "guide" (+3)
        assert score_relevance(note, "rust guide", NOW) == 36

    def test_recency_bonus_inside_seven_days(self):
        fresh = make_note("Rust", age_days=2)
        boundary = make_note("Rust", age_days=7)
        assert score_relevance(fresh, "rust", NOW) == 31
        assert score_relevance(boundary, "rust", NOW) == 30

    def test_recency_bonus_applies_without_text_match(self):
        note = make_note("Cooking", age_days=0)
        assert score_relevance(note, "rust", NOW) == 1

    def test_recency_falls_back_to_created_at(self):
        note = make_note("Rust", age_days=30).model_copy(
            update={"updated_at": None, "created_at": NOW - timedelta(days=1)}
        )
        assert score_relevance(note, "rust", NOW) == 31

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_ties_everything(self, query):
        notes = [make_note("Rust", age_days=0), make_note("Other")]
        assert [score_relevance(n, query, NOW) for n in notes] == [0, 0]

    def test_scoring_is_deterministic(self):
        note = make_note("Rust Guide", "ownership in rust", ["rust"])
        assert score_relevance(note, "rust", NOW) == score_relevance(note, "rust", NOW)

    def test_does_not_mutate_note(self):
        note = make_note("Rust Guide", "ownership", ["Rust"])
        before = note.model_dump()
        score_relevance(note, "rust", NOW)
        assert note.model_dump() == before


class TestRankNotes:
    def test_drops_non_matches_and_orders_by_score(self):
        exact = make_note("rust")
        partial = make_note("Learning rust")
        unrelated = make_note("Sourdough")

        ranked = rank_notes([unrelated, partial, exact], "rust", now=NOW)
        assert [note for note, _ in ranked] == [exact, partial]
        assert [score for _, score in ranked] == [30, 10]

    def test_ties_use_title_order_when_requested(self):
        zeta = make_note("Zeta rust")
        alpha = make_note("alpha rust")
        ranked = rank_notes([zeta, alpha], "rust", tie_breaker=SortKey.TITLE, now=NOW)
        assert [note.title for note, _ in ranked] == ["alpha rust", "Zeta rust"]

    def test_ties_use_most_recent_update_by_default(self):
        older = make_note("rust one", age_days=20)
        newer = make_note("rust two", age_days=10)
        ranked = rank_notes([older, newer], "rust", now=NOW)
        assert [note for note, _ in ranked] == [newer, older]

    def test_ties_use_creation_date_when_requested(self):
        first = make_note("rust one", age_days=10, created_days_ago=100)
        second = make_note("rust two", age_days=20, created_days_ago=50)
        ranked = rank_notes([first, second], "rust", tie_breaker=SortKey.CREATED, now=NOW)
        assert [note for note, _ in ranked] == [second, first]

    def test_empty_query_returns_all_in_secondary_order(self):
        notes = [make_note("b", age_days=5), make_note("a", age_days=1), make_note("c", age_days=9)]
        ranked = rank_notes(notes, "", tie_breaker=SortKey.UPDATED, now=NOW)
        assert [note.title for note, _ in ranked] == ["a", "b", "c"]
        assert all(score == 0 for _, score in ranked)

    def test_empty_corpus(self):
        assert rank_notes([], "rust", now=NOW) == []


class TestSortNotes:
    def test_title_sort_is_case_insensitive(self):
        notes = [make_note("banana"), make_note("Apple"), make_note("cherry")]
        assert [n.title for n in sort_notes(notes, SortKey.TITLE)] == ["Apple", "banana", "cherry"]
