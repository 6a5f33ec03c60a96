"""
Forest builder.

Builds forests of tree nodes from flat collections of relationship edges.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Union

from edgetree.core.content import heading_depth, heading_text, node_kind, node_plain_text
from edgetree.core.model import GraphEdge, HierarchyLink, NodeIndex, NodeType
from edgetree.hierarchy.errors import CyclicHierarchyError
from edgetree.hierarchy.tree import Forest, TreeNode

logger = logging.getLogger(__name__)

ResolveHierarchy = Callable[[GraphEdge], Union[HierarchyLink, None, bool]]
NodeLevel = Callable[[Any, Union[GraphEdge, None], Union[TreeNode, None], int], int]
NodeLabel = Callable[[Any, Union[GraphEdge, None], Union[TreeNode, None], int], str]


# ---------------------------------------------------------------------------
# Default policies
# ---------------------------------------------------------------------------


def default_resolve_hierarchy(edge: GraphEdge) -> HierarchyLink:
    """Treat ``edge.from_node`` as the child and ``edge.to_node`` as the parent."""
    return HierarchyLink(parent=edge.to_node, child=edge.from_node)


def default_node_label(
    node: Any,
    edge: GraphEdge | None = None,
    parent: TreeNode | None = None,
    level: int = 0,
) -> str:
    """
    Best-effort label based on the node's kind.

    Examples:
    heading depth 2 "Setup" -> "heading:#2 Setup"
    paragraph "Some text" -> "paragraph:Some text"
    anything else -> JSON dump of the node
    """
    kind = node_kind(node)
    if kind is None:
        return "(not a node!)"

    if kind in (NodeType.HEADING.value, NodeType.PARAGRAPH.value):
        if kind == NodeType.HEADING.value:
            text = heading_text(node)
            depth = heading_depth(node)
        else:
            text = node_plain_text(node)
            depth = None

        if text:
            depth_part = f"#{depth} " if depth is not None else ""
            return f"{kind}:{depth_part}{text}"

    return _structural_dump(node)


def _structural_dump(node: Any) -> str:
    payload = node.to_dict() if hasattr(node, "to_dict") else node
    try:
        return json.dumps(payload, default=repr, ensure_ascii=False)
    except (TypeError, ValueError):
        # Circular references or keys JSON cannot encode
        return repr(node)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass
class ForestConfig:
    """Configuration for building a forest from edges.

    Attributes:
        relationships: Optional allow-list. When empty, every relationship
            shapes the tree. Otherwise the first entry is the primary
            relationship and is the only one that shapes the tree; the other
            entries are tracked per node; unlisted relationships are dropped.
        resolve_hierarchy: Maps an edge to its parent/child pair, or returns
            a falsy value to ignore the edge entirely.
        node_level: Optional level override, called with
            ``(node, edge, parent, default_level)``.
        node_label: Label policy, called with ``(node, edge, parent, level)``.
    """

    relationships: list[str] = field(default_factory=list)
    resolve_hierarchy: ResolveHierarchy = default_resolve_hierarchy
    node_level: NodeLevel | None = None
    node_label: NodeLabel = default_node_label

    @property
    def primary_rel(self) -> str | None:
        """The relationship that shapes the tree, or None if all do."""
        return self.relationships[0] if self.relationships else None


# ---------------------------------------------------------------------------
# Bookkeeping
# ---------------------------------------------------------------------------


class _ChildLink(NamedTuple):
    child: int
    via: GraphEdge


class _HierarchyIndex:
    """Structural links and incoming relationships for one build call.

    Nodes are referred to by handles from a ``NodeIndex``.
    """

    def __init__(self) -> None:
        self.nodes = NodeIndex()
        self.parent_by_node: dict[int, tuple[int, GraphEdge]] = {}
        self.children_by_node: dict[int, list[_ChildLink]] = {}
        self.incoming_rels: dict[int, dict[str, None]] = {}
        self.used_rels: dict[str, None] = {}

    def link(self, parent: int, child: int, edge: GraphEdge) -> None:
        """Record a structural parent/child link (last write wins)."""
        previous = self.parent_by_node.get(child)
        if previous is not None and previous[0] != parent:
            logger.debug(
                "Node %r moved from parent %r to %r via %r",
                self.nodes.node(child),
                self.nodes.node(previous[0]),
                self.nodes.node(parent),
                edge.rel,
            )
            old_siblings = self.children_by_node[previous[0]]
            old_siblings[:] = [c for c in old_siblings if c.child != child]

        self.parent_by_node[child] = (parent, edge)

        children = self.children_by_node.setdefault(parent, [])
        if not any(c.child == child and c.via is edge for c in children):
            children.append(_ChildLink(child, edge))

        # Child participates structurally even without children of its own
        self.register(child)

    def register(self, handle: int) -> None:
        """Make *handle* part of the forest; it is a root until linked."""
        self.children_by_node.setdefault(handle, [])

    def track(self, child: int, rel: str) -> None:
        """Record an incoming relationship for *child*."""
        self.incoming_rels.setdefault(child, {})[rel] = None
        self.used_rels[rel] = None

    def root_handles(self) -> list[int]:
        """Structural nodes without a parent, in discovery order."""
        return [h for h in self.children_by_node if h not in self.parent_by_node]

    def cycle_from(self, start: int) -> list[Any]:
        """Walk the parent chain from *start* until a node repeats."""
        path: list[int] = []
        position: dict[int, int] = {}
        current = start
        while current not in position:
            position[current] = len(path)
            path.append(current)
            current = self.parent_by_node[current][0]
        cycle = path[position[current]:] + [current]
        return [self.nodes.node(h) for h in cycle]


@dataclass
class _Frame:
    handle: int
    shell: TreeNode
    pending: Iterator[_ChildLink]
    built: list[TreeNode] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_forest(
    edges: Iterable[GraphEdge],
    config: ForestConfig | None = None,
) -> Forest:
    """Build a forest of tree nodes from relationship edges.

    Strategy:
    1. Drop edges whose relationship is not allowed, then resolve each
       edge to a parent/child pair (unresolved edges are dropped)
    2. Structural edges (primary relationship, or all when none is set)
       link child to parent, last write wins
    3. Every resolved edge adds its relationship to the child's set; the
       child of a non-structural edge joins the forest as a node
    4. Roots are forest nodes without a parent, in discovery order
    5. Tree nodes are materialised depth-first, parent before children

    Args:
        edges: Edge collection; may be empty or contain duplicates.
        config: Builder configuration. Uses defaults when None.

    Returns:
        Forest with roots in discovery order.

    Raises:
        CyclicHierarchyError: If a structural parent chain revisits a node.
    """
    cfg = config or ForestConfig()
    all_edges = tuple(edges)

    allowed = set(cfg.relationships) if cfg.relationships else None
    primary = cfg.primary_rel

    index = _HierarchyIndex()
    dropped: Counter[str] = Counter()
    unresolved = 0

    for edge in all_edges:
        if allowed is not None and edge.rel not in allowed:
            dropped[edge.rel] += 1
            continue

        resolved = cfg.resolve_hierarchy(edge)
        if not resolved:
            unresolved += 1
            continue

        parent, child = resolved
        parent_handle = index.nodes.handle(parent)
        child_handle = index.nodes.handle(child)

        if primary is None or edge.rel == primary:
            index.link(parent_handle, child_handle, edge)
        else:
            index.register(child_handle)

        index.track(child_handle, edge.rel)

    if dropped:
        logger.debug("Dropped %d edge(s) not in allow-list: %s", sum(dropped.values()), dict(dropped))
    if unresolved:
        logger.debug("Ignored %d edge(s) the resolver rejected", unresolved)

    if not index.parent_by_node:
        return Forest(rels=(), edges=all_edges, roots=())

    visited: set[int] = set()
    roots = tuple(
        _materialize(handle, index, cfg, visited) for handle in index.root_handles()
    )

    for handle in index.children_by_node:
        if handle not in visited:
            raise CyclicHierarchyError(index.cycle_from(handle))

    logger.debug(
        "Built forest with %d root(s) from %d edge(s)", len(roots), len(all_edges)
    )
    return Forest(rels=tuple(index.used_rels), edges=all_edges, roots=roots)


def _make_shell(
    handle: int,
    parent: TreeNode | None,
    edge: GraphEdge | None,
    index: _HierarchyIndex,
    cfg: ForestConfig,
) -> TreeNode:
    """Create a childless tree node with level and label applied."""
    node = index.nodes.node(handle)
    default_level = parent.level + 1 if parent else 0
    level = (
        cfg.node_level(node, edge, parent, default_level)
        if cfg.node_level
        else default_level
    )
    label = cfg.node_label(node, edge, parent, level)
    return TreeNode(
        node=node,
        edge=edge,
        rels=tuple(index.incoming_rels.get(handle, ())),
        label=label,
        level=level,
    )


def _materialize(
    root: int,
    index: _HierarchyIndex,
    cfg: ForestConfig,
    visited: set[int],
) -> TreeNode:
    """Build the tree under *root* with an explicit stack.

    Nodes on the current path are tracked so that a revisited node raises
    instead of looping.
    """
    on_path = {root}
    visited.add(root)
    stack = [
        _Frame(
            handle=root,
            shell=_make_shell(root, None, None, index, cfg),
            pending=iter(index.children_by_node.get(root, [])),
        )
    ]

    while True:
        frame = stack[-1]
        link = next(frame.pending, None)

        if link is None:
            stack.pop()
            on_path.discard(frame.handle)
            finished = dataclasses.replace(frame.shell, children=tuple(frame.built))
            if not stack:
                return finished
            stack[-1].built.append(finished)
            continue

        if link.child in on_path:
            raise CyclicHierarchyError(index.cycle_from(link.child))

        on_path.add(link.child)
        visited.add(link.child)
        stack.append(
            _Frame(
                handle=link.child,
                shell=_make_shell(link.child, frame.shell, link.via, index, cfg),
                pending=iter(index.children_by_node.get(link.child, [])),
            )
        )
