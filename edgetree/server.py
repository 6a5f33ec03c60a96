"""FastAPI server for edgetree.

Provides REST endpoints that build forests from posted edge documents and
render them as text, JSON, or Graphviz DOT. Endpoints are registered on an
``APIRouter`` so a host application can mount them under a prefix.

The standalone ``app`` object includes the router directly::

    uvicorn edgetree.server:app --reload --port 8430
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from edgetree import __version__
from edgetree.core.model import ContentNode, GraphEdge
from edgetree.hierarchy import CyclicHierarchyError, Forest, ForestConfig, build_forest
from edgetree.render import (
    edges_to_dot,
    forest_to_dict,
    headings_tree_text,
    render_forest_text,
)

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="edgetree API",
    description="Hierarchies and tree views from typed relationship edges",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class EdgeRequest(BaseModel):
    """A single edge referencing node ids."""

    model_config = ConfigDict(populate_by_name=True)

    rel: str
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")


class ForestRequest(BaseModel):
    """Request body shared by every forest endpoint."""

    nodes: dict[str, dict[str, Any]]
    edges: list[EdgeRequest]
    relationships: list[str] = Field(default_factory=list)


class TextRequest(ForestRequest):
    """Request for rendering a forest as text."""

    headings_only: bool = False
    emit_colors: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_edges(request: ForestRequest) -> list[GraphEdge]:
    """Turn a request into edges over ContentNode objects."""
    try:
        nodes = {
            node_id: ContentNode.from_dict(data)
            for node_id, data in request.nodes.items()
        }
    except KeyError as e:
        logger.warning("Rejected node without %s", e)
        raise HTTPException(status_code=400, detail=f"Node is missing field {e}")

    edges = []
    for edge in request.edges:
        missing = [i for i in (edge.from_id, edge.to_id) if i not in nodes]
        if missing:
            logger.warning("Rejected edge %s with unknown node(s) %s", edge.rel, missing)
            raise HTTPException(
                status_code=400,
                detail=f"Unknown node id(s): {', '.join(missing)}",
            )
        edges.append(GraphEdge(edge.rel, nodes[edge.from_id], nodes[edge.to_id]))
    return edges


def _build(request: ForestRequest, edges: list[GraphEdge]) -> Forest:
    try:
        return build_forest(edges, ForestConfig(relationships=request.relationships))
    except CyclicHierarchyError as e:
        logger.warning("Rejected cyclic hierarchy: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/api/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
    }


@router.post("/api/forest")
async def build_forest_endpoint(request: ForestRequest) -> dict[str, Any]:
    """Build a forest and return it as JSON."""
    forest = _build(request, _load_edges(request))
    return forest_to_dict(forest)


@router.post("/api/forest/text")
async def render_text_endpoint(request: TextRequest) -> dict[str, Any]:
    """Build a forest and render it as an indented text tree."""
    forest = _build(request, _load_edges(request))
    if request.headings_only:
        text = headings_tree_text(forest, emit_colors=request.emit_colors)
    else:
        text = render_forest_text(forest)
    return {"text": text, "rels": list(forest.rels)}


@router.post("/api/forest/dot")
async def render_dot_endpoint(request: ForestRequest) -> dict[str, Any]:
    """Render the posted edges as Graphviz DOT."""
    return {"dot": edges_to_dot(_load_edges(request))}


app.include_router(router)
