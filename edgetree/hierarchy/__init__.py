"""
Hierarchy module - builds forests from relationship edges.

This module turns flat "X relates to Y" edges into immutable forests of
tree nodes.
"""

from edgetree.hierarchy.builder import (
    ForestConfig,
    build_forest,
    default_node_label,
    default_resolve_hierarchy,
)
from edgetree.hierarchy.errors import CyclicHierarchyError, HierarchyError
from edgetree.hierarchy.tree import Forest, TreeNode

__all__ = [
    "CyclicHierarchyError",
    "Forest",
    "ForestConfig",
    "HierarchyError",
    "TreeNode",
    "build_forest",
    "default_node_label",
    "default_resolve_hierarchy",
]
