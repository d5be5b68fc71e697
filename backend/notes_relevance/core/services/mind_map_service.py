from __future__ import annotations

import math
from itertools import combinations
from typing import TYPE_CHECKING

from notes_relevance.config import settings
from notes_relevance.core.models.graph import EdgeKind, GraphEdge, GraphNode, MindMap, NodeKind
from notes_relevance.core.relevance import (
    DEFAULT_KEYWORD_LIMIT,
    SEMANTIC_EDGE_THRESHOLD,
    extract_keywords,
    text_similarity,
)
from notes_relevance.utils.logging import get_logger
from notes_relevance.utils.validation import require_non_negative

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_relevance.core.models.note import Note
    from notes_relevance.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)

KEYWORD_NODE_WEIGHT = 0.5
TAG_NODE_WEIGHT = 0.7
KEYWORD_EDGE_STRENGTH = 0.6
TAG_EDGE_STRENGTH = 0.8


def keyword_node_id(keyword: str) -> str:
    return f"keyword_{keyword}"


def tag_node_id(tag: str) -> str:
    return f"tag_{tag}"


def build_mind_map(
    notes: Sequence[Note],
    *,
    keyword_limit: int = DEFAULT_KEYWORD_LIMIT,
    similarity_threshold: float = SEMANTIC_EDGE_THRESHOLD,
    similarity_cap: int = 10,
) -> MindMap:
    """Build the note/keyword/tag graph for ``notes``.

    Every note links to its top keywords and to its tags. Semantic edges are
    only computed among the first ``similarity_cap`` notes, and only drawn when
    their text similarity exceeds ``similarity_threshold``.
    """
    require_non_negative(similarity_cap, "similarity_cap")
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    seen: set[str] = set()

    def add_node(node: GraphNode) -> None:
        if node.id not in seen:
            seen.add(node.id)
            nodes.append(node)

    for note in notes:
        add_node(
            GraphNode(
                id=str(note.id),
                kind=NodeKind.DOCUMENT,
                label=note.title,
                weight=math.log(len(note.content) + 1),
            )
        )
        for keyword in extract_keywords(note, notes, keyword_limit):
            add_node(GraphNode(id=keyword_node_id(keyword), kind=NodeKind.KEYWORD, label=keyword, weight=KEYWORD_NODE_WEIGHT))
            edges.append(
                GraphEdge(
                    source=str(note.id),
                    target=keyword_node_id(keyword),
                    strength=KEYWORD_EDGE_STRENGTH,
                    kind=EdgeKind.KEYWORD,
                )
            )

    all_tags = list(dict.fromkeys(tag for note in notes for tag in note.tags))
    for tag in all_tags:
        add_node(GraphNode(id=tag_node_id(tag), kind=NodeKind.TAG, label=f"#{tag}", weight=TAG_NODE_WEIGHT))
        for note in notes:
            if tag in note.tags:
                edges.append(
                    GraphEdge(source=str(note.id), target=tag_node_id(tag), strength=TAG_EDGE_STRENGTH, kind=EdgeKind.TAG)
                )

    for first, second in combinations(notes[:similarity_cap], 2):
        similarity = text_similarity(first.text, second.text)
        if similarity > similarity_threshold:
            edges.append(
                GraphEdge(
                    source=str(first.id),
                    target=str(second.id),
                    strength=min(similarity, 1.0),
                    kind=EdgeKind.SEMANTIC,
                )
            )

    return MindMap(nodes=nodes, edges=edges)


class MindMapService:
    """Builds the mind map from the user's current notes on each request."""

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def generate(self, *, user_id: UUID) -> MindMap:
        notes = await self._repo.list(limit=settings.corpus_limit, user_id=user_id)
        mind_map = build_mind_map(
            notes,
            keyword_limit=settings.keyword_limit,
            similarity_threshold=settings.semantic_edge_threshold,
            similarity_cap=settings.mind_map_similarity_cap,
        )
        logger.info(
            "Created %d nodes with %d connections",
            len(mind_map.nodes), len(mind_map.edges),
            extra={"user_id": str(user_id)},
        )
        return mind_map
