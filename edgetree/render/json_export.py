"""JSON rendering for forests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from edgetree.hierarchy.tree import Forest

# Increment MAJOR on breaking changes, MINOR on additive changes.
SCHEMA_VERSION = "1.0"


def forest_to_dict(forest: Forest) -> dict[str, Any]:
    """Convert a forest to a JSON-serializable dictionary."""
    return {
        "schema_version": SCHEMA_VERSION,
        **forest.to_dict(),
    }


def render_forest_json(forest: Forest, indent: int | None = 2) -> str:
    """Render a forest as a JSON string, stamped with the generation time."""
    output = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        **forest_to_dict(forest),
    }
    return json.dumps(output, indent=indent, ensure_ascii=False)
