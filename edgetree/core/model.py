"""
Edge and node model for edgetree.

This module defines the minimal data structures that flow through the
hierarchy builder and the renderers: content nodes, typed relationship
edges, and the parent/child link an edge resolves to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple


class NodeType(Enum):
    """Kinds of content nodes found in a parsed document tree."""

    ROOT = "root"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    INLINE_CODE = "inlineCode"
    CODE = "code"
    LIST = "list"
    LIST_ITEM = "listItem"
    TABLE = "table"
    BLOCKQUOTE = "blockquote"
    THEMATIC_BREAK = "thematicBreak"
    HTML = "html"


@dataclass(eq=False)
class ContentNode:
    """
    A node of a parsed document tree.

    Nodes are compared by identity, never by value: two headings with the
    same text are two different nodes. The hierarchy builder keys all of its
    bookkeeping on that identity.
    """

    type: str
    value: str | None = None
    depth: int | None = None  # For heading nodes: 1-6
    children: list[ContentNode] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    def add_child(self, child: ContentNode) -> ContentNode:
        """Append a child node and return it."""
        self.children.append(child)
        return child

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.value is not None:
            result["value"] = self.value
        if self.depth is not None:
            result["depth"] = self.depth
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.data:
            result["data"] = self.data
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentNode:
        return cls(
            type=data["type"],
            value=data.get("value"),
            depth=data.get("depth"),
            children=[cls.from_dict(child) for child in data.get("children", [])],
            data=data.get("data", {}),
        )

    def __repr__(self) -> str:
        preview = (self.value or "")[:30]
        return f"<ContentNode {self.type} '{preview}' children={len(self.children)}>"


@dataclass(frozen=True, eq=False)
class GraphEdge:
    """
    A directed relationship fact between two nodes.

    Which side of the edge is the parent is decided by the hierarchy
    resolver, not by the edge itself. Edges compare by identity so that two
    distinct edges carrying the same endpoints stay distinct.

    Attributes:
        rel: Relationship label (e.g. ``containedInSection``).
        from_node: Source node.
        to_node: Target node.
    """

    rel: str
    from_node: Any
    to_node: Any

    def __repr__(self) -> str:
        return f"<GraphEdge {self.rel}: {self.from_node!r} -> {self.to_node!r}>"


class HierarchyLink(NamedTuple):
    """Parent/child pair an edge resolves to."""

    parent: Any
    child: Any


class NodeIndex:
    """
    Identity-keyed registry of nodes.

    Assigns each node a stable integer handle at first sight, so arbitrary
    (even unhashable) objects can be used as nodes. Handles follow discovery
    order.
    """

    def __init__(self) -> None:
        self._handles: dict[int, int] = {}
        self._nodes: list[Any] = []

    def handle(self, node: Any) -> int:
        """Return the handle for *node*, registering it if unseen."""
        key = id(node)
        existing = self._handles.get(key)
        if existing is not None:
            return existing
        handle = len(self._nodes)
        self._handles[key] = handle
        self._nodes.append(node)
        return handle

    def node(self, handle: int) -> Any:
        return self._nodes[handle]

    def __len__(self) -> int:
        return len(self._nodes)
