from __future__ import annotations

"""Tree-view host interface.

Defines the capability the outline controller drives. Any rendering
technology can host the outline as long as it asks the controller for
children/parents and can reveal an item.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from outline_toolkit.ui.controllers.outline_item import OutlineTreeItem


@runtime_checkable
class OutlineTreeHost(Protocol):
    """Protocol for widgets that display the outline.

    Hosts pull items with ``controller.get_children(item)`` and
    ``controller.get_parent(item)`` after each change notification. They key
    row state on item identity: the controller returns the same item object
    while the node and its classification are unchanged.
    """

    def reveal(
        self,
        item: "OutlineTreeItem",
        *,
        expand: bool = True,
        select: bool = True,
        focus: bool = False,
    ) -> None:
        """Scroll to ``item``, expanding its ancestors.

        Args:
            item: Item previously returned by the controller, or created by it
                for a node the host has not rendered yet.
            expand: Also expand the item itself.
            select: Make the item the current selection.
            focus: Move keyboard focus to the tree.

        Note:
            May raise if the underlying widget is gone; the controller
            catches and logs such failures.
        """
        ...
