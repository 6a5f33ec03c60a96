"""Renderers for forests and edge collections."""

from edgetree.render.dot import edges_to_dot
from edgetree.render.json_export import forest_to_dict, render_forest_json
from edgetree.render.text import (
    TextRenderOptions,
    colorize_by_level,
    headings_tree_text,
    render_forest_text,
)

__all__ = [
    "TextRenderOptions",
    "colorize_by_level",
    "edges_to_dot",
    "forest_to_dict",
    "headings_tree_text",
    "render_forest_json",
    "render_forest_text",
]
