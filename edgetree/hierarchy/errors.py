"""Exceptions raised while building hierarchies."""

from __future__ import annotations

from typing import Any


class HierarchyError(Exception):
    """Base class for hierarchy building errors."""


class CyclicHierarchyError(HierarchyError):
    """Raised when a structural parent chain revisits a node.

    Attributes:
        cycle: Nodes on the cycle, in child-to-parent order, starting and
            ending with the revisited node.
    """

    def __init__(self, cycle: list[Any]) -> None:
        self.cycle = cycle
        super().__init__(
            f"Structural hierarchy contains a cycle of {len(cycle) - 1} node(s)"
        )
