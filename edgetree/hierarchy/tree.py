"""
Forest data structures.

The immutable result of building a hierarchy from edges: tree nodes that
wrap content nodes, and the forest that holds the roots.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from edgetree.core.content import node_kind
from edgetree.core.model import GraphEdge


@dataclass(frozen=True, eq=False)
class TreeNode:
    """
    A node in a forest built from edges.

    Each tree node wraps one content node with:
    - The edge that attached it to its parent (None for roots)
    - Every relationship arriving at the content node, structural or not
    - A display label and a level
    """

    node: Any
    edge: GraphEdge | None = None
    rels: tuple[str, ...] = ()
    label: str = ""
    level: int = 0
    children: tuple[TreeNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0

    @property
    def descendant_count(self) -> int:
        """Count all descendants (children, grandchildren, etc.)."""
        return sum(1 for _ in self.walk()) - 1

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and all descendants in pre-order."""
        stack: list[TreeNode] = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def get_leaves(self) -> list[TreeNode]:
        """Get all leaf nodes under this node."""
        return [n for n in self.walk() if n.is_leaf]

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary for JSON export.

        Args:
            include_children: If True, include all descendants as nested dicts
        """
        if not include_children:
            return self._fields()

        # Post-order so every child dict exists before its parent's
        built: dict[int, dict[str, Any]] = {}
        stack: list[tuple[TreeNode, bool]] = [(self, False)]
        while stack:
            current, expanded = stack.pop()
            if not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in current.children)
                continue
            result = current._fields()
            result["children"] = [built[id(child)] for child in current.children]
            built[id(current)] = result

        return built[id(self)]

    def _fields(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "level": self.level,
            "kind": node_kind(self.node),
            "rels": list(self.rels),
            "edge_rel": self.edge.rel if self.edge else None,
            "is_leaf": self.is_leaf,
            "child_count": len(self.children),
        }

    def __repr__(self) -> str:
        return (
            f"<TreeNode '{self.label[:40]}' level={self.level} "
            f"rels={list(self.rels)} children={len(self.children)}>"
        )


@dataclass(frozen=True, eq=False)
class Forest:
    """
    An ordered collection of root tree nodes.

    Attributes:
        rels: Relationships that took part in building, in first-seen order.
        edges: The original input edges.
        roots: Root tree nodes in discovery order.
    """

    rels: tuple[str, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    roots: tuple[TreeNode, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.roots

    @property
    def total_nodes(self) -> int:
        """Count all tree nodes across every root."""
        return sum(1 for _ in self.walk())

    @property
    def max_depth(self) -> int:
        """Get the maximum structural depth (a lone root has depth 0)."""
        deepest = 0
        stack = [(root, 0) for root in self.roots]
        while stack:
            current, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in current.children)
        return deepest

    @property
    def leaf_count(self) -> int:
        return sum(1 for n in self.walk() if n.is_leaf)

    def walk(self) -> Iterator[TreeNode]:
        """Yield every tree node, root by root, in pre-order."""
        for root in self.roots:
            yield from root.walk()

    def nodes(self) -> list[Any]:
        """Get the distinct content nodes reachable from the roots."""
        seen: set[int] = set()
        result = []
        for tree_node in self.walk():
            if id(tree_node.node) not in seen:
                seen.add(id(tree_node.node))
                result.append(tree_node.node)
        return result

    def find(self, node: Any) -> TreeNode | None:
        """Find the first tree node wrapping *node* (by identity)."""
        for tree_node in self.walk():
            if tree_node.node is node:
                return tree_node
        return None

    def get_statistics(self) -> dict[str, Any]:
        """Get forest statistics for analysis."""
        return {
            "root_count": len(self.roots),
            "total_nodes": self.total_nodes,
            "leaf_count": self.leaf_count,
            "max_depth": self.max_depth,
            "edge_count": len(self.edges),
            "rels": list(self.rels),
            "level_distribution": self._get_level_distribution(),
        }

    def _get_level_distribution(self) -> dict[int, int]:
        """Get count of tree nodes at each level."""
        return dict(Counter(n.level for n in self.walk()))

    def to_dict(self) -> dict[str, Any]:
        """Convert the entire forest to a dictionary."""
        return {
            "rels": list(self.rels),
            "statistics": self.get_statistics(),
            "roots": [root.to_dict(include_children=True) for root in self.roots],
        }

    def __repr__(self) -> str:
        return (
            f"<Forest roots={len(self.roots)} "
            f"nodes={self.total_nodes} "
            f"rels={list(self.rels)}>"
        )
