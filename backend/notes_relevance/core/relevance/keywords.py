from __future__ import annotations

import math
from collections import Counter
from typing import TYPE_CHECKING

from notes_relevance.core.relevance.tokenizer import normalize
from notes_relevance.utils.validation import require_non_negative

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notes_relevance.core.models.note import Note

DEFAULT_KEYWORD_LIMIT = 5


def extract_keywords(note: Note, corpus: Sequence[Note], limit: int = DEFAULT_KEYWORD_LIMIT) -> list[str]:
    """Rank the note's terms by TF-IDF against ``corpus``.

    Term frequency is taken over the normalized title and content. Document
    frequency counts corpus notes whose lower-cased text contains the term as
    a substring and is floored at 1. Equal scores keep first-seen order.
    """
    require_non_negative(limit, "limit")

    tokens = normalize(note.text)
    if not tokens or limit == 0:
        return []

    term_freq = Counter(tokens)
    total = len(tokens)
    corpus_texts = [doc.text.lower() for doc in corpus]
    corpus_size = max(len(corpus_texts), 1)

    scores: list[tuple[str, float]] = []
    for term, count in term_freq.items():
        doc_freq = sum(1 for text in corpus_texts if term in text) or 1
        scores.append((term, (count / total) * math.log(corpus_size / doc_freq)))

    scores.sort(key=lambda item: item[1], reverse=True)
    return [term for term, _ in scores[:limit]]
