"""
Node content helpers.

Read-only accessors that pull a kind tag and visible text out of content
nodes. They accept ``ContentNode`` instances as well as plain mappings
shaped like unist nodes (``{"type": ..., "children": [...]}``).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from edgetree.core.model import NodeType

_MAX_PARAGRAPH_LABEL = 80
_MAX_CODE_LABEL = 60


def _field(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def node_kind(node: Any) -> str | None:
    """Return the node's kind tag (``heading``, ``paragraph``...), if any."""
    kind = _field(node, "type")
    if isinstance(kind, Enum):
        kind = kind.value
    if isinstance(kind, str) and kind:
        return kind
    return None


def node_children(node: Any) -> list[Any]:
    children = _field(node, "children")
    return list(children) if isinstance(children, (list, tuple)) else []


def heading_depth(node: Any) -> int | None:
    depth = _field(node, "depth")
    return depth if isinstance(depth, int) else None


def heading_text(node: Any) -> str:
    """Return the first text run of a heading, or "" for non-headings."""
    if node_kind(node) != NodeType.HEADING.value:
        return ""
    for child in node_children(node):
        value = _field(child, "value")
        if node_kind(child) == NodeType.TEXT.value and isinstance(value, str):
            return value
    return ""


def node_plain_text(node: Any) -> str:
    """Flatten the visible text of a node, ignoring formatting."""
    if node_kind(node) == NodeType.ROOT.value:
        return "root"

    parts: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        value = _field(current, "value")
        if node_kind(current) == NodeType.TEXT.value and value:
            parts.append(str(value))
        # Reverse so the leftmost child is visited first
        stack.extend(reversed(node_children(current)))
    return "".join(parts)


def truncate_label(text: str, max_length: int) -> str:
    """Shorten *text* to *max_length* characters, ending with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 1].rstrip() + "…"


def typical_node_label(node: Any) -> str:
    """
    Build a short, human-readable label for any content node.

    Examples:
    heading depth 2 "Setup" -> "heading: #2 Setup"
    paragraph "Intro text" -> "paragraph: Intro text"
    code block in yaml -> "code: yaml key: value"
    list item -> "- First item"

    Unlike the structural default used by the hierarchy builder, this never
    falls back to a JSON dump.
    """
    kind = node_kind(node) or "unknown"

    if kind == NodeType.HEADING.value:
        text = heading_text(node) or "(heading)"
        depth = heading_depth(node)
        depth_part = f"#{depth} " if depth is not None else ""
        return f"heading: {depth_part}{text}"

    if kind == NodeType.PARAGRAPH.value:
        text = node_plain_text(node) or "(paragraph)"
        return f"paragraph: {truncate_label(text, _MAX_PARAGRAPH_LABEL)}"

    if kind == NodeType.CODE.value:
        lang = _field(node, "lang") or (_field(node, "data") or {}).get("lang")
        value = _field(node, "value") or ""
        first_line = str(value).splitlines()[0] if value else ""
        lang_part = f"{str(lang).lower()} " if lang else ""
        text_part = truncate_label(first_line, _MAX_CODE_LABEL) if first_line else "(code)"
        return f"code: {lang_part}{text_part}"

    if kind in (NodeType.LIST.value, NodeType.LIST_ITEM.value):
        text = node_plain_text(node)
        if text:
            prefix = "- " if kind == NodeType.LIST_ITEM.value else "list: "
            return f"{prefix}{truncate_label(text, _MAX_PARAGRAPH_LABEL)}"
        return kind

    text = node_plain_text(node)
    if text:
        return f"{kind}:{truncate_label(text, _MAX_PARAGRAPH_LABEL)}"
    return kind
