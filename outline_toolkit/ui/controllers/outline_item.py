from __future__ import annotations

"""Rendered outline items handed to tree-view hosts.

Items compare by identity. The controller reuses one item per node instance
for as long as the node's classification is unchanged, so a host can key its
own row state (expansion, selection, scroll anchor) on the item object.
"""

from enum import IntEnum
from typing import List, Optional, Tuple

from outline_toolkit.core.models import ItemState, OutlineNode

__all__ = ["CollapsibleState", "OutlineTreeItem", "CONTEXT_VALUES"]


class CollapsibleState(IntEnum):
    NONE = 0
    COLLAPSED = 1
    EXPANDED = 2


CONTEXT_VALUES = {
    ItemState.ACTIVE: "outlineActive",
    ItemState.ANCESTOR: "outlineAncestor",
    ItemState.PLAIN: "outlineItem",
}

_ICONS = {
    ItemState.ACTIVE: "circle-filled",
    ItemState.ANCESTOR: "chevron-right",
}


class OutlineTreeItem:
    """View-facing wrapper around one :class:`OutlineNode` instance.

    Attributes
    ----------
    node : OutlineNode
        The exact node this item renders.
    state : ItemState
        Classification at construction time; a change produces a new item.
    label : str
        Heading text, or the untitled placeholder for empty headings.
    highlights : list of (start, end)
        Label ranges to emphasise. Active and ancestor items highlight the
        whole label.
    description : str
        Heading level as ``H<level>``.
    context_value : str
        ``outlineActive``, ``outlineAncestor`` or ``outlineItem``.
    icon : str or None
        Icon name for active/ancestor rows.
    target_offset : int
        Document offset emitted as the navigation intent on activation.
    collapsible_state : CollapsibleState
        Expansion hint, refreshed by the controller on reuse.
    """

    def __init__(
        self,
        node: OutlineNode,
        state: ItemState,
        collapsible_state: CollapsibleState,
        *,
        untitled_label: str = "(Untitled)",
    ) -> None:
        self.node = node
        self.state = state
        self.label: str = node.text or untitled_label
        self.highlights: List[Tuple[int, int]] = (
            [(0, len(self.label))] if state is not ItemState.PLAIN else []
        )
        self.description: str = f"H{node.level}"
        self.context_value: str = CONTEXT_VALUES[state]
        self.icon: Optional[str] = _ICONS.get(state)
        self.target_offset: int = node.pos
        self.collapsible_state: CollapsibleState = collapsible_state

    @property
    def has_children(self) -> bool:
        return bool(self.node.children)

    @property
    def force_expanded(self) -> bool:
        """True for items on the active path; hosts must keep them open."""
        return self.state is not ItemState.PLAIN and self.has_children

    def __repr__(self) -> str:
        return f"OutlineTreeItem({self.label!r}, {self.context_value}, {self.collapsible_state.name})"
