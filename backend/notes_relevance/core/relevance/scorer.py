"""Interactive search scoring for notes.

Weights are additive and independent of note length. A query matching
nothing scores 0 and the note is left out of ranked results.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notes_relevance.core.models.note import Note

TITLE_CONTAINS_WEIGHT = 10.0
TITLE_EXACT_WEIGHT = 20.0
TAG_CONTAINS_WEIGHT = 5.0
TAG_EXACT_WEIGHT = 10.0
WORD_EXACT_WEIGHT = 3.0
WORD_PARTIAL_WEIGHT = 1.0
RECENCY_BONUS = 1.0
RECENCY_WINDOW = timedelta(days=7)


class SortKey(str, Enum):
    """Secondary order applied among notes with equal scores."""

    UPDATED = "updated"
    CREATED = "created"
    TITLE = "title"


def score_relevance(note: Note, query: str, now: datetime | None = None) -> float:
    """Return the search relevance of ``note`` for ``query``.

    An empty (or blank) query scores every note 0 so callers fall back to
    their secondary order.
    """
    q = (query or "").strip().lower()
    if not q:
        return 0.0

    score = 0.0

    title = note.title.lower()
    if q in title:
        score += TITLE_CONTAINS_WEIGHT
    if title == q:
        score += TITLE_EXACT_WEIGHT

    lowered_tags = [tag.lower() for tag in note.tags]
    score += TAG_CONTAINS_WEIGHT * sum(1 for tag in lowered_tags if q in tag)
    if any(tag == q for tag in lowered_tags):
        score += TAG_EXACT_WEIGHT

    # Quadratic in query words x content words; both are note-sized.
    content_words = note.content.lower().split()
    for query_word in q.split():
        for word in content_words:
            if query_word in word:
                score += WORD_EXACT_WEIGHT if word == query_word else WORD_PARTIAL_WEIGHT

    current = now or datetime.now(UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    if current - note.last_modified < RECENCY_WINDOW:
        score += RECENCY_BONUS

    return score


def sort_notes(notes: Iterable[Note], key: SortKey) -> list[Note]:
    """Order notes by a secondary key: newest first for dates, A-Z for titles."""
    if key is SortKey.TITLE:
        return sorted(notes, key=lambda n: n.title.casefold())
    if key is SortKey.CREATED:
        return sorted(notes, key=lambda n: n.created_at, reverse=True)
    return sorted(notes, key=lambda n: n.last_modified, reverse=True)


def rank_notes(
    notes: Iterable[Note],
    query: str,
    *,
    tie_breaker: SortKey = SortKey.UPDATED,
    now: datetime | None = None,
) -> list[tuple[Note, float]]:
    """Score and order notes for ``query``.

    Notes scoring 0 are dropped unless the query is empty, in which case every
    note is returned in ``tie_breaker`` order with score 0.
    """
    current = now or datetime.now(UTC)
    ordered = sort_notes(notes, tie_breaker)
    if not (query or "").strip():
        return [(note, 0.0) for note in ordered]

    scored = [(note, score_relevance(note, query, current)) for note in ordered]
    matched = [item for item in scored if item[1] > 0]
    # Stable sort keeps the tie_breaker order among equal scores
    matched.sort(key=lambda item: item[1], reverse=True)
    return matched
