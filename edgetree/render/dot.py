"""Graphviz DOT export for visual debugging of edge collections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from edgetree.core.content import node_kind
from edgetree.core.model import GraphEdge, NodeIndex


def _escape(text: str) -> str:
    return text.replace('"', '\\"')


def edges_to_dot(
    edges: Iterable[GraphEdge],
    root: Any = None,
    graph_name: str = "G",
) -> str:
    """Turn an edge collection into a Graphviz DOT string.

    Nodes get synthetic ids (``n0``, ``n1``...) in first-seen order and are
    labeled with their kind tag, ``root`` for *root*, or ``node`` when they
    carry no kind. Edges are labeled with their relationship.

    Args:
        edges: Edges to draw.
        root: Optional document root node, labeled ``root``.
        graph_name: Name of the digraph.
    """
    edge_list = list(edges)
    index = NodeIndex()
    for edge in edge_list:
        index.handle(edge.from_node)
        index.handle(edge.to_node)

    lines = [f"digraph {graph_name} {{"]

    for handle in range(len(index)):
        node = index.node(handle)
        if root is not None and node is root:
            label = "root"
        else:
            label = node_kind(node) or "node"
        lines.append(f'  n{handle} [label="{_escape(label)}"];')

    for edge in edge_list:
        from_id = index.handle(edge.from_node)
        to_id = index.handle(edge.to_node)
        lines.append(f'  n{from_id} -> n{to_id} [label="{_escape(str(edge.rel))}"];')

    lines.append("}")
    return "\n".join(lines)
