"""Top-level package for the Outline Toolkit.

The core (``outline_toolkit.core``) turns a flat heading list into an outline
tree, tracks the cursor's active heading and filters by text. The controller
in ``outline_toolkit.ui.controllers`` adapts that state to any tree-view host;
the Tk widgets in ``outline_toolkit.ui.widgets`` are one such host.
"""

from .core.exceptions import InvalidOutlineEntryError, OutlineError
from .core.models import OutlineEntry, OutlineNode
from .ui.controllers.outline_controller import OutlineController

__all__: list[str] = [
    "InvalidOutlineEntryError",
    "OutlineController",
    "OutlineEntry",
    "OutlineError",
    "OutlineNode",
]
