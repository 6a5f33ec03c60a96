"""Core edge and node model."""

from edgetree.core.content import (
    heading_text,
    node_kind,
    node_plain_text,
    truncate_label,
    typical_node_label,
)
from edgetree.core.model import (
    ContentNode,
    GraphEdge,
    HierarchyLink,
    NodeIndex,
    NodeType,
)

__all__ = [
    "ContentNode",
    "GraphEdge",
    "HierarchyLink",
    "NodeIndex",
    "NodeType",
    "heading_text",
    "node_kind",
    "node_plain_text",
    "truncate_label",
    "typical_node_label",
]
