"""
edgetree - hierarchies and tree views from typed relationship edges.

Builds immutable forests from flat "X relates to Y" edges between content
nodes and renders them as relationship-grouped text.
"""

__version__ = "0.1.0"

from edgetree.core.model import ContentNode, GraphEdge, HierarchyLink, NodeType
from edgetree.hierarchy import (
    CyclicHierarchyError,
    Forest,
    ForestConfig,
    HierarchyError,
    TreeNode,
    build_forest,
)
from edgetree.render import TextRenderOptions, headings_tree_text, render_forest_text

__all__ = [
    "ContentNode",
    "CyclicHierarchyError",
    "Forest",
    "ForestConfig",
    "GraphEdge",
    "HierarchyError",
    "HierarchyLink",
    "NodeType",
    "TextRenderOptions",
    "TreeNode",
    "build_forest",
    "headings_tree_text",
    "render_forest_text",
]
