"""Tests for the edge/node model and node content helpers."""

from __future__ import annotations

from edgetree.core.content import (
    heading_text,
    node_kind,
    node_plain_text,
    truncate_label,
    typical_node_label,
)
from edgetree.core.model import ContentNode, GraphEdge, NodeIndex, NodeType


# ===================================================================
# Helpers
# ===================================================================


def _heading(text: str, depth: int = 1) -> ContentNode:
    return ContentNode(
        type="heading", depth=depth, children=[ContentNode(type="text", value=text)]
    )


def _paragraph(*runs: str) -> ContentNode:
    return ContentNode(
        type="paragraph",
        children=[ContentNode(type="text", value=run) for run in runs],
    )


# ===================================================================
# ContentNode / GraphEdge
# ===================================================================


class TestContentNode:
    """Tests for ContentNode identity and serialization."""

    def test_identity_equality(self):
        a = ContentNode(type="text", value="same")
        b = ContentNode(type="text", value="same")
        assert a != b
        assert a == a
        assert len({a, b}) == 2

    def test_add_child(self):
        parent = ContentNode(type="paragraph")
        child = parent.add_child(ContentNode(type="text", value="hi"))
        assert parent.children == [child]

    def test_round_trip_dict(self):
        node = _heading("Title", depth=2)
        node.data["id"] = "title"
        restored = ContentNode.from_dict(node.to_dict())
        assert restored.type == "heading"
        assert restored.depth == 2
        assert restored.children[0].value == "Title"
        assert restored.data == {"id": "title"}

    def test_to_dict_omits_empty_fields(self):
        assert ContentNode(type="thematicBreak").to_dict() == {"type": "thematicBreak"}

    def test_node_type_values(self):
        assert NodeType.LIST_ITEM.value == "listItem"
        node = ContentNode(type=NodeType.HEADING.value)
        assert node_kind(node) == "heading"


class TestGraphEdge:
    """Tests for GraphEdge."""

    def test_edges_compare_by_identity(self):
        a, b = ContentNode(type="text"), ContentNode(type="text")
        first = GraphEdge("rel", a, b)
        second = GraphEdge("rel", a, b)
        assert first != second
        assert first == first

    def test_fields(self):
        a, b = object(), object()
        edge = GraphEdge("containedInSection", a, b)
        assert edge.rel == "containedInSection"
        assert edge.from_node is a
        assert edge.to_node is b


class TestNodeIndex:
    """Tests for identity-keyed node handles."""

    def test_handles_follow_discovery_order(self):
        index = NodeIndex()
        a, b = {"type": "x"}, {"type": "x"}
        assert index.handle(a) == 0
        assert index.handle(b) == 1
        assert index.handle(a) == 0
        assert len(index) == 2

    def test_unhashable_nodes(self):
        index = NodeIndex()
        node = {"type": "paragraph", "children": []}
        handle = index.handle(node)
        assert index.node(handle) is node
        assert index.handle({"type": "paragraph", "children": []}) == 1


# ===================================================================
# Content helpers
# ===================================================================


class TestContentHelpers:
    """Tests for kind/text extraction."""

    def test_node_kind_from_mapping(self):
        assert node_kind({"type": "heading"}) == "heading"

    def test_node_kind_from_enum(self):
        assert node_kind(ContentNode(type=NodeType.CODE)) == "code"

    def test_node_kind_missing(self):
        assert node_kind(object()) is None
        assert node_kind({"value": "x"}) is None

    def test_heading_text_first_text_run(self):
        node = ContentNode(
            type="heading",
            depth=1,
            children=[
                ContentNode(type="text", value="First"),
                ContentNode(type="text", value="Second"),
            ],
        )
        assert heading_text(node) == "First"

    def test_heading_text_non_heading(self):
        assert heading_text(_paragraph("text")) == ""

    def test_plain_text_nested(self):
        node = ContentNode(
            type="paragraph",
            children=[
                ContentNode(type="text", value="Hello "),
                ContentNode(
                    type="emphasis", children=[ContentNode(type="text", value="big")]
                ),
                ContentNode(type="text", value=" world"),
            ],
        )
        assert node_plain_text(node) == "Hello big world"

    def test_plain_text_root(self):
        assert node_plain_text(ContentNode(type="root")) == "root"

    def test_plain_text_mapping(self):
        node = {"type": "paragraph", "children": [{"type": "text", "value": "dict"}]}
        assert node_plain_text(node) == "dict"

    def test_truncate_label(self):
        assert truncate_label("short", 10) == "short"
        assert truncate_label("abcdefghij", 5) == "abcd…"
        assert len(truncate_label("x" * 100, 20)) == 20


class TestTypicalNodeLabel:
    """Tests for the human-readable node labels."""

    def test_heading(self):
        assert typical_node_label(_heading("Setup", depth=2)) == "heading: #2 Setup"

    def test_empty_heading(self):
        assert typical_node_label(ContentNode(type="heading")) == "heading: (heading)"

    def test_paragraph_truncated(self):
        label = typical_node_label(_paragraph("word " * 40))
        assert label.startswith("paragraph: word")
        assert label.endswith("…")

    def test_code(self):
        node = {"type": "code", "lang": "YAML", "value": "key: value\nother: 1"}
        assert typical_node_label(node) == "code: yaml key: value"

    def test_empty_code(self):
        assert typical_node_label({"type": "code"}) == "code: (code)"

    def test_list_item(self):
        item = ContentNode(type="listItem", children=[_paragraph("item 1")])
        assert typical_node_label(item) == "- item 1"

    def test_fallback_with_text(self):
        node = ContentNode(
            type="blockquote", children=[_paragraph("quoted")]
        )
        assert typical_node_label(node) == "blockquote:quoted"

    def test_fallback_without_text(self):
        assert typical_node_label(ContentNode(type="thematicBreak")) == "thematicBreak"
