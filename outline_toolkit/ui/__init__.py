"""Outline Toolkit UI package.

The controller layer here carries no toolkit code. Tkinter widgets live in
:mod:`outline_toolkit.ui.widgets` and are imported explicitly by hosts.
"""

from .controllers.outline_controller import OutlineController  # noqa: F401
from .controllers.outline_item import CollapsibleState, OutlineTreeItem  # noqa: F401
from .interfaces import OutlineTreeHost  # noqa: F401

__all__: list[str] = [
    "CollapsibleState",
    "OutlineController",
    "OutlineTreeHost",
    "OutlineTreeItem",
]
