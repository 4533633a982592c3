from __future__ import annotations

"""Shared data structures used across the Outline Toolkit core.

This package exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from .outline import ActivePath, ItemState, OutlineEntry, OutlineForest, OutlineNode
from .ui_config import DEFAULT_OUTLINE_SETTINGS, OutlineSettings

__all__ = [
    "ActivePath",
    "ItemState",
    "OutlineEntry",
    "OutlineForest",
    "OutlineNode",
    "OutlineSettings",
    "DEFAULT_OUTLINE_SETTINGS",
]
