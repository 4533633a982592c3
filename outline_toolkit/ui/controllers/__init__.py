"""UI controllers package for Outline Toolkit.

Controllers mediate between tree-view hosts and the core outline services.
"""

from .outline_controller import OutlineController
from .outline_item import CONTEXT_VALUES, CollapsibleState, OutlineTreeItem

__all__: list[str] = [
    "CONTEXT_VALUES",
    "CollapsibleState",
    "OutlineController",
    "OutlineTreeItem",
]
