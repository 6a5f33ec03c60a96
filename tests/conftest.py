"""
Pytest configuration and fixtures for edgetree tests.
"""

import pytest

from edgetree.core.model import ContentNode, GraphEdge


def make_heading(text: str, depth: int = 1) -> ContentNode:
    """Create a heading node with a single text run."""
    return ContentNode(
        type="heading",
        depth=depth,
        children=[ContentNode(type="text", value=text)],
    )


def make_paragraph(text: str) -> ContentNode:
    """Create a paragraph node with a single text run."""
    return ContentNode(
        type="paragraph",
        children=[ContentNode(type="text", value=text)],
    )


@pytest.fixture
def sample_document() -> dict[str, ContentNode]:
    """Create a small document: two top-level sections with content."""
    return {
        "root": ContentNode(type="root"),
        "intro": make_heading("Intro", depth=1),
        "intro_p": make_paragraph("Welcome."),
        "setup": make_heading("Setup", depth=2),
        "setup_p": make_paragraph("Install it."),
        "usage": make_heading("Usage", depth=1),
        "usage_p": make_paragraph("Run it."),
    }


@pytest.fixture
def section_edges(sample_document: dict[str, ContentNode]) -> list[GraphEdge]:
    """Containment edges (child -> section) for the sample document."""
    doc = sample_document
    return [
        GraphEdge("containedInSection", doc["intro_p"], doc["intro"]),
        GraphEdge("containedInSection", doc["setup"], doc["intro"]),
        GraphEdge("containedInSection", doc["setup_p"], doc["setup"]),
        GraphEdge("containedInSection", doc["usage_p"], doc["usage"]),
        GraphEdge("isImportant", doc["setup_p"], doc["root"]),
    ]
