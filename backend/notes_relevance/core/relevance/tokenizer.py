from __future__ import annotations

import re

MIN_TOKEN_LENGTH = 4

STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "this", "that", "these", "those", "they", "them", "their", "there",
    "where", "when", "what", "who", "why", "how", "can", "may", "might",
    "must", "shall", "from", "into", "through", "during", "before", "after",
    "above", "below", "up", "down", "out", "off", "over", "under", "again",
    "further", "then", "once",
})

# Anything that is not a letter, digit or whitespace (underscore included).
_NON_WORD_RE = re.compile(r"[^\w\s]|_")


def normalize(text: str) -> list[str]:
    """Split text into lower-cased keyword tokens.

    Punctuation becomes whitespace, tokens shorter than four characters and
    stop words are dropped. Order and duplicates are preserved.
    """
    if not text:
        return []
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]
