"""Local text similarity and deterministic pseudo-embeddings.

Both algorithms are dependency-free and reproducible: the same text always
yields the same similarity and the same vector, so embeddings stored long ago
remain comparable with fresh ones. The hash base and the offsets below are
part of the vector geometry and must not change.
"""
from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from notes_relevance.utils.validation import require_positive

if TYPE_CHECKING:
    from collections.abc import Sequence

JACCARD_WEIGHT = 0.7
LENGTH_WEIGHT = 0.3
MIN_SIMILARITY_TOKEN_LENGTH = 3
SEMANTIC_EDGE_THRESHOLD = 0.3

EMBEDDING_DIMENSIONS = 384
HASH_BASE = 31
CHAR_OFFSET_STRIDE = 17
TRIGRAM_SECONDARY_FACTOR = 7
CHAR_FREQUENCY = 0.1
TRIGRAM_PRIMARY_WEIGHT = 0.2
TRIGRAM_SECONDARY_WEIGHT = 0.1
MAX_CHARS_PER_TOKEN = 10

# Word characters are ASCII only; accented letters split and strip like punctuation.
_SPLIT_RE = re.compile(r"\W+", re.ASCII)
_STRIP_RE = re.compile(r"[^A-Za-z0-9_\s]")


def _similarity_tokens(text: str) -> set[str]:
    return {w for w in _SPLIT_RE.split(text.lower()) if len(w) >= MIN_SIMILARITY_TOKEN_LENGTH}


def text_similarity(text_a: str, text_b: str) -> float:
    """Blend token-set Jaccard (0.7) with raw length parity (0.3).

    Cheaper than :func:`normalize`: no stop-word filtering, tokens of three or
    more characters. Returns a value in ``[0, 1]``.
    """
    tokens_a = _similarity_tokens(text_a)
    tokens_b = _similarity_tokens(text_b)
    union = tokens_a | tokens_b
    jaccard = len(tokens_a & tokens_b) / len(union) if union else 0.0

    longest = max(len(text_a), len(text_b))
    length_similarity = 1 - abs(len(text_a) - len(text_b)) / longest if longest else 0.0

    return JACCARD_WEIGHT * jaccard + LENGTH_WEIGHT * length_similarity


def _embedding_tokens(lowered: str) -> list[str]:
    # Punctuation is deleted, not split on: "don't" embeds as "dont".
    return _STRIP_RE.sub("", lowered).split()


def string_hash(value: str) -> int:
    """Polynomial string hash wrapped to signed 32 bits, returned as its absolute value."""
    h = 0
    for ch in value:
        h = (h * HASH_BASE + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def embed_text(text: str, dimensions: int = EMBEDDING_DIMENSIONS) -> list[float]:
    """Return an L2-normalized pseudo-embedding of ``text``.

    Word positions contribute damped character signals, character trigrams
    add fixed bumps. Text with no word token and fewer than three characters
    (empty text, "!!") yields the all-zero vector.
    """
    require_positive(dimensions, "dimensions")
    vector = [0.0] * dimensions
    lowered = (text or "").lower()

    tokens = _embedding_tokens(lowered)
    for index, token in enumerate(tokens):
        token_hash = string_hash(token)
        damping = math.sqrt(index + 1)
        for offset, ch in enumerate(token[:MAX_CHARS_PER_TOKEN]):
            pos = (token_hash + offset * CHAR_OFFSET_STRIDE) % dimensions
            vector[pos] += math.sin(ord(ch) * CHAR_FREQUENCY) / damping

    for i in range(len(lowered) - 2):
        trigram_hash = string_hash(lowered[i:i + 3])
        vector[trigram_hash % dimensions] += TRIGRAM_PRIMARY_WEIGHT
        vector[(trigram_hash * TRIGRAM_SECONDARY_FACTOR) % dimensions] += TRIGRAM_SECONDARY_WEIGHT

    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude > 0:
        vector = [v / magnitude for v in vector]
    return vector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product over norms; 0 when either vector is all zeros."""
    if len(a) != len(b):
        raise ValueError(f"vector dimensions differ: {len(a)} != {len(b)}")
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / (norm_a * norm_b)
