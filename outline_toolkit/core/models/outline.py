from __future__ import annotations

"""Outline data structures: heading entries, tree nodes and derived state.

Nodes compare and hash by identity. Every cache in the engine (node to
rendered item, node to parent) is keyed by the exact node instance, so two
structurally equal nodes from different tree generations never alias.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from outline_toolkit.core.exceptions import InvalidOutlineEntryError

__all__ = [
    "OutlineEntry",
    "OutlineNode",
    "OutlineForest",
    "ActivePath",
    "ItemState",
]


class ItemState(str, Enum):
    """Visual classification of a node relative to the active path."""

    PLAIN = "none"
    ACTIVE = "active"
    ANCESTOR = "ancestor"


@dataclass(frozen=True)
class OutlineEntry:
    """A single document heading as produced by a heading extractor.

    Attributes
    ----------
    level
        Heading depth, 1 for the shallowest heading.
    text
        Heading label. May be empty; consumers display a placeholder.
    pos
        Offset of the heading start in the document.
    section_end
        Offset where the heading's section ends: the position of the next
        heading at the same or a shallower level, or the end of the document.
    """

    level: int
    text: str
    pos: int
    section_end: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OutlineEntry":
        """Build an entry from an extractor message.

        Accepts both ``sectionEnd`` and ``section_end``; extra keys such as
        ``sectionStart`` are ignored.
        """
        try:
            section_end = data["sectionEnd"] if "sectionEnd" in data else data["section_end"]
            return cls(
                level=int(data["level"]),
                text=str(data.get("text") or ""),
                pos=int(data["pos"]),
                section_end=int(section_end),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidOutlineEntryError(f"cannot read entry from {dict(data)!r}", entry=data, cause=exc) from exc


@dataclass(eq=False)
class OutlineNode:
    """An outline entry placed in the tree, with its ordered children."""

    level: int
    text: str
    pos: int
    section_end: int
    children: List["OutlineNode"] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: OutlineEntry) -> "OutlineNode":
        return cls(entry.level, entry.text, entry.pos, entry.section_end)

    def contains(self, offset: int) -> bool:
        """Return True if ``offset`` lies in ``[pos, section_end)``."""
        return self.pos <= offset < self.section_end

    def shallow_copy(self, children: Optional[List["OutlineNode"]] = None) -> "OutlineNode":
        """Return a new node with the same entry fields and the given children."""
        return OutlineNode(self.level, self.text, self.pos, self.section_end, list(children or []))

    def to_entry(self) -> OutlineEntry:
        return OutlineEntry(self.level, self.text, self.pos, self.section_end)

    def __repr__(self) -> str:
        return (
            f"OutlineNode(level={self.level}, text={self.text!r}, pos={self.pos}, "
            f"section_end={self.section_end}, children={len(self.children)})"
        )


@dataclass
class OutlineForest:
    """Ordered roots plus the parent lookup for this exact forest shape.

    ``parent_of`` maps every node reachable from ``roots`` to its parent in
    this forest, or to ``None`` for roots. A filtered forest carries its own
    map because its nodes are copies.
    """

    roots: List[OutlineNode] = field(default_factory=list)
    parent_of: Dict[OutlineNode, Optional[OutlineNode]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.roots)

    def iter_nodes(self):
        """Yield every node in document (pre-order) order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def path_to(self, node: OutlineNode) -> List[OutlineNode]:
        """Return the root-to-node chain (inclusive) using ``parent_of``."""
        chain: List[OutlineNode] = []
        current: Optional[OutlineNode] = node
        while current is not None:
            chain.append(current)
            current = self.parent_of.get(current)
        chain.reverse()
        return chain


@dataclass(frozen=True)
class ActivePath:
    """The deepest node containing the cursor and its strict ancestors."""

    active: Optional[OutlineNode] = None
    ancestors: FrozenSet[OutlineNode] = frozenset()

    def state_of(self, node: OutlineNode) -> ItemState:
        if node is self.active:
            return ItemState.ACTIVE
        if node in self.ancestors:
            return ItemState.ANCESTOR
        return ItemState.PLAIN

    def is_on_path(self, node: OutlineNode) -> bool:
        return node is self.active or node in self.ancestors
