from __future__ import annotations

"""Outline engine services (tree building, cursor tracking, filtering, extraction).

Every service is UI-agnostic and operates purely on in-memory structures.
"""

from .active_tracker import ActiveTracker, locate  # noqa: F401
from .filter_service import filter_forest, is_blank_term, matches  # noqa: F401
from .heading_extractor import compute_outline, extract_outline  # noqa: F401
from .tree_builder import build_tree, coerce_entries  # noqa: F401

__all__: list[str] = [
    "ActiveTracker",
    "locate",
    "filter_forest",
    "is_blank_term",
    "matches",
    "compute_outline",
    "extract_outline",
    "build_tree",
    "coerce_entries",
]
