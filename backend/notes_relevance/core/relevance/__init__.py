from .keywords import DEFAULT_KEYWORD_LIMIT, extract_keywords
from .scorer import SortKey, rank_notes, score_relevance, sort_notes
from .similarity import (
    EMBEDDING_DIMENSIONS,
    SEMANTIC_EDGE_THRESHOLD,
    cosine_similarity,
    embed_text,
    text_similarity,
)
from .tokenizer import STOP_WORDS, normalize

__all__ = [
    "DEFAULT_KEYWORD_LIMIT",
    "EMBEDDING_DIMENSIONS",
    "SEMANTIC_EDGE_THRESHOLD",
    "STOP_WORDS",
    "SortKey",
    "cosine_similarity",
    "embed_text",
    "extract_keywords",
    "normalize",
    "rank_notes",
    "score_relevance",
    "sort_notes",
    "text_similarity",
]
