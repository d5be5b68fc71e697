from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import AppBaseModel


class NodeKind(str, Enum):
    DOCUMENT = "document"
    KEYWORD = "keyword"
    TAG = "tag"


class EdgeKind(str, Enum):
    SEMANTIC = "semantic"
    TAG = "tag"
    KEYWORD = "keyword"


class GraphNode(AppBaseModel):
    """A note, an extracted keyword or a tag in the mind map."""

    id: str
    kind: NodeKind
    label: str
    weight: float = Field(ge=0)


class GraphEdge(AppBaseModel):
    source: str
    target: str
    strength: float = Field(ge=0, le=1)
    kind: EdgeKind


class MindMap(AppBaseModel):
    """Graph payload rebuilt from the current notes on every request."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
