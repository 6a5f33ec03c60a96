"""
Tests for the edgetree FastAPI server.
"""

import pytest
from fastapi.testclient import TestClient

from edgetree.server import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def document_payload() -> dict:
    """A heading with a paragraph and a sub-heading."""
    return {
        "nodes": {
            "h1": {"type": "heading", "depth": 1, "children": [{"type": "text", "value": "Intro"}]},
            "p1": {"type": "paragraph", "children": [{"type": "text", "value": "Hello."}]},
            "h2": {"type": "heading", "depth": 2, "children": [{"type": "text", "value": "Setup"}]},
        },
        "edges": [
            {"rel": "containedInSection", "from": "p1", "to": "h1"},
            {"rel": "containedInSection", "from": "h2", "to": "h1"},
        ],
    }


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data


class TestForestEndpoints:
    """Tests for forest building and rendering endpoints."""

    def test_build_forest(self, client, document_payload):
        response = client.post("/api/forest", json=document_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["rels"] == ["containedInSection"]
        root = data["roots"][0]
        assert root["label"] == "heading:#1 Intro"
        assert [c["label"] for c in root["children"]] == [
            "paragraph:Hello.",
            "heading:#2 Setup",
        ]

    def test_render_text(self, client, document_payload):
        response = client.post("/api/forest/text", json=document_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["text"] == (
            "- containedInSection\n"
            "  heading:#1 Intro\n"
            "  ├─ paragraph:Hello.\n"
            "  └─ heading:#2 Setup"
        )

    def test_render_headings_only(self, client, document_payload):
        document_payload["headings_only"] = True
        response = client.post("/api/forest/text", json=document_payload)
        assert response.status_code == 200
        assert "paragraph" not in response.json()["text"]

    def test_relationship_allow_list(self, client, document_payload):
        document_payload["edges"].append({"rel": "other", "from": "h1", "to": "h2"})
        document_payload["relationships"] = ["containedInSection"]
        response = client.post("/api/forest", json=document_payload)
        assert response.status_code == 200
        assert response.json()["rels"] == ["containedInSection"]

    def test_render_dot(self, client, document_payload):
        response = client.post("/api/forest/dot", json=document_payload)
        assert response.status_code == 200
        dot = response.json()["dot"]
        assert dot.startswith("digraph G {")
        assert 'n0 -> n1 [label="containedInSection"];' in dot


class TestErrorHandling:
    """Tests for rejected requests."""

    def test_unknown_node_id(self, client, document_payload):
        document_payload["edges"].append({"rel": "x", "from": "p1", "to": "missing"})
        response = client.post("/api/forest", json=document_payload)
        assert response.status_code == 400
        assert "missing" in response.json()["detail"]

    def test_node_without_type(self, client, document_payload):
        document_payload["nodes"]["bad"] = {"value": "no type"}
        response = client.post("/api/forest", json=document_payload)
        assert response.status_code == 400

    def test_cyclic_hierarchy(self, client, document_payload):
        document_payload["edges"].append({"rel": "containedInSection", "from": "h1", "to": "h2"})
        response = client.post("/api/forest/text", json=document_payload)
        assert response.status_code == 422
        assert "cycle" in response.json()["detail"]

    def test_invalid_body(self, client):
        response = client.post("/api/forest", json={"edges": []})
        assert response.status_code == 422
