"""Text rendering for forests.

Renders a forest as an indented tree using box-drawing branch markers,
either once for the whole forest or once per relationship::

    - containedInSection
      heading:#1 Intro
      ├─ paragraph:First
      └─ heading:#2 Details
         └─ paragraph:Second
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from edgetree.core.content import node_kind
from edgetree.core.model import NodeType
from edgetree.hierarchy.tree import Forest, TreeNode

BRANCH = "├─ "
LAST_BRANCH = "└─ "
CONTINUATION = "│  "
BLANK = "   "
SECTION_INDENT = "  "

ANSI_RESET = "\x1b[0m"
ANSI_BOLD = "\x1b[1m"
# Cycled for levels below the root
LEVEL_PALETTE = (
    "\x1b[36m",  # cyan
    "\x1b[33m",  # yellow
    "\x1b[32m",  # green
    "\x1b[35m",  # magenta
    "\x1b[34m",  # blue
)

Ancestors = tuple[TreeNode, ...]
NodePredicate = Callable[[TreeNode, Ancestors, Union[str, None]], bool]
NodeLabeler = Callable[[TreeNode, Ancestors, Union[str, None]], str]


@dataclass
class TextRenderOptions:
    """Formatting and filtering callbacks for ``render_forest_text``.

    Every callback receives ``(node, ancestors, relationship)`` where
    ``ancestors`` runs from the root down to the parent, and
    ``relationship`` is the section being rendered (None when the forest
    tracks no relationships).

    Attributes:
        label: Line text for a node. Defaults to the stored label.
        should_follow: Whether to descend into a node's children.
        should_emit: Whether to print the node's own line. A node that is
            followed but not emitted is transparent: its children print
            under the nearest printed ancestor without extra indentation.
        relationships: Relationships to render sections for. None uses
            the forest's relationships; an empty list renders the forest
            once without sections.
    """

    label: NodeLabeler | None = None
    should_follow: NodePredicate | None = None
    should_emit: NodePredicate | None = None
    relationships: list[str] | None = None


def _stored_label(node: TreeNode, ancestors: Ancestors, relationship: str | None) -> str:
    return node.label


def _always(node: TreeNode, ancestors: Ancestors, relationship: str | None) -> bool:
    return True


class _ForestTextRenderer:
    """Renders one forest. Holds the relevance cache for a single call."""

    def __init__(self, options: TextRenderOptions) -> None:
        self._label = options.label or _stored_label
        self._should_follow = options.should_follow or _always
        self._should_emit = options.should_emit or _always
        self._relationships = options.relationships
        self._relevance: dict[tuple[str, TreeNode], bool] = {}

    def render(self, forest: Forest) -> str:
        rels = forest.rels if self._relationships is None else tuple(self._relationships)

        if not rels:
            blocks = []
            for root in forest.roots:
                lines = self._render_root(root, None)
                if lines:
                    blocks.append("\n".join(lines))
            return "\n\n".join(blocks)

        sections = []
        for rel in rels:
            lines = []
            for root in forest.roots:
                if self._has_rel(root, rel):
                    lines.extend(self._render_root(root, rel))
            if lines:
                section = [f"- {rel}"] + [SECTION_INDENT + line for line in lines]
                sections.append("\n".join(section))
        return "\n\n".join(sections)

    def _has_rel(self, node: TreeNode, rel: str) -> bool:
        """Check whether the node or any descendant carries *rel*.

        Fills the relevance cache for the whole subtree bottom-up.
        """
        key = (rel, node)
        cached = self._relevance.get(key)
        if cached is not None:
            return cached

        stack: list[tuple[TreeNode, bool]] = [(node, False)]
        while stack:
            current, expanded = stack.pop()
            if (rel, current) in self._relevance:
                continue
            if not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in current.children)
                continue
            self._relevance[(rel, current)] = rel in current.rels or any(
                self._relevance[(rel, child)] for child in current.children
            )
        return self._relevance[key]

    def _children(self, node: TreeNode, rel: str | None) -> list[TreeNode]:
        if rel is None:
            return list(node.children)
        return [child for child in node.children if self._has_rel(child, rel)]

    def _render_root(self, root: TreeNode, rel: str | None) -> list[str]:
        """Render one root and its followed descendants in pre-order."""
        lines: list[str] = []
        # (node, ancestors, prefix, is_last, has_printed_ancestor)
        stack: list[tuple[TreeNode, Ancestors, str, bool, bool]] = [
            (root, (), "", True, False)
        ]
        while stack:
            node, ancestors, prefix, is_last, has_printed_ancestor = stack.pop()
            follow = self._should_follow(node, ancestors, rel)
            emit = self._should_emit(node, ancestors, rel)

            if not emit and not follow:
                continue

            if emit:
                label = self._label(node, ancestors, rel)
                if has_printed_ancestor:
                    connector = LAST_BRANCH if is_last else BRANCH
                    lines.append(f"{prefix}{connector}{label}")
                else:
                    lines.append(label)

            if not follow:
                continue

            children = self._children(node, rel)
            if not children:
                continue

            # Transparent and top-level nodes hand their own prefix down unchanged
            if emit and has_printed_ancestor:
                child_prefix = prefix + (BLANK if is_last else CONTINUATION)
            else:
                child_prefix = prefix

            next_ancestors = ancestors + (node,)
            last_index = len(children) - 1
            for i in range(last_index, -1, -1):
                stack.append(
                    (
                        children[i],
                        next_ancestors,
                        child_prefix,
                        i == last_index,
                        has_printed_ancestor or emit,
                    )
                )
        return lines


def render_forest_text(forest: Forest, options: TextRenderOptions | None = None) -> str:
    """Render a forest as a multi-line string.

    When relationships are tracked (the forest's own, unless the options
    name others), the output holds one section per relationship, headed by
    ``- <rel>`` and indented by two spaces, with blank lines between
    sections. Sections with nothing to show are left out. Without
    relationships, the forest renders once with a blank line between roots.

    Args:
        forest: Forest to render.
        options: Label and filtering callbacks. Uses defaults when None.

    Returns:
        Rendered text without a trailing newline.
    """
    return _ForestTextRenderer(options or TextRenderOptions()).render(forest)


def colorize_by_level(label: str, level: int) -> str:
    """Wrap *label* in ANSI styling keyed by tree level."""
    if level <= 0:
        style = ANSI_BOLD
    else:
        style = LEVEL_PALETTE[(level - 1) % len(LEVEL_PALETTE)]
    return f"{style}{label}{ANSI_RESET}"


def headings_tree_text(
    forest: Forest,
    emit_colors: bool = False,
    is_heading_like: Callable[[Any], bool] | None = None,
) -> str:
    """Render only the headings of a forest.

    Non-heading nodes are transparent, so deeper headings still appear
    under their nearest heading ancestor.

    Args:
        forest: Forest to render.
        emit_colors: If True, style each label by level with ANSI codes.
        is_heading_like: Optional predicate for content nodes that should be
            shown as headings even though their kind is not ``heading``.
    """

    def should_emit(node: TreeNode, ancestors: Ancestors, relationship: str | None) -> bool:
        if node_kind(node.node) == NodeType.HEADING.value:
            return True
        return bool(is_heading_like and is_heading_like(node.node))

    def label(node: TreeNode, ancestors: Ancestors, relationship: str | None) -> str:
        if emit_colors:
            return colorize_by_level(node.label, node.level)
        return node.label

    return render_forest_text(
        forest,
        TextRenderOptions(label=label, should_emit=should_emit),
    )
