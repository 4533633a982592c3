from __future__ import annotations

"""Flat heading list to outline forest (UI-agnostic).

The builder runs a single pass with a stack of open sections ordered by
increasing level. Entries are validated as they are placed so that a
malformed list fails here, before any downstream state is replaced.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from outline_toolkit.core.exceptions import InvalidOutlineEntryError
from outline_toolkit.core.models import OutlineEntry, OutlineForest, OutlineNode

logger = logging.getLogger(__name__)

__all__ = ["build_tree", "coerce_entries"]

EntryLike = Union[OutlineEntry, Mapping[str, Any]]


def coerce_entries(entries: Optional[Iterable[EntryLike]]) -> List[OutlineEntry]:
    """Return ``entries`` as a list of :class:`OutlineEntry`.

    Mappings (extractor messages) are converted with
    :meth:`OutlineEntry.from_mapping`; ``None`` is treated as an empty list.
    """
    result: List[OutlineEntry] = []
    for index, entry in enumerate(entries or ()):
        if isinstance(entry, OutlineEntry):
            result.append(entry)
        elif isinstance(entry, Mapping):
            try:
                result.append(OutlineEntry.from_mapping(entry))
            except InvalidOutlineEntryError as exc:
                raise InvalidOutlineEntryError(str(exc.args[0]), index=index, entry=entry, cause=exc.cause) from exc
        else:
            raise InvalidOutlineEntryError(
                f"expected OutlineEntry or mapping, got {type(entry).__name__}", index=index, entry=entry
            )
    return result


def build_tree(entries: Optional[Iterable[EntryLike]]) -> OutlineForest:
    """Build the outline forest for an ordered heading list.

    For each entry, open sections whose level is >= the entry's level are
    closed; the remaining innermost open section becomes its parent, or the
    entry becomes a new root. Level jumps nest directly (an H3 after an H1 is
    the H1's child). Sibling order follows input order.

    Raises
    ------
    InvalidOutlineEntryError
        If an entry has ``level < 1``, ``section_end <= pos``, a position not
        strictly greater than the previous entry's, or a position outside its
        parent's section range.
    """
    forest = OutlineForest()
    stack: List[OutlineNode] = []
    previous_pos: Optional[int] = None

    for index, entry in enumerate(coerce_entries(entries)):
        _validate(entry, index, previous_pos)
        previous_pos = entry.pos
        node = OutlineNode.from_entry(entry)

        while stack and stack[-1].level >= node.level:
            stack.pop()

        parent = stack[-1] if stack else None
        if parent is not None:
            if not parent.contains(node.pos):
                raise InvalidOutlineEntryError(
                    f"heading at {node.pos} nests under {parent.text!r} "
                    f"but lies outside its section [{parent.pos}, {parent.section_end})",
                    index=index,
                    entry=entry,
                )
            parent.children.append(node)
        else:
            forest.roots.append(node)
        forest.parent_of[node] = parent
        stack.append(node)

    logger.debug("Built outline: %d headings, %d roots", len(forest.parent_of), len(forest.roots))
    return forest


def _validate(entry: OutlineEntry, index: int, previous_pos: Optional[int]) -> None:
    if entry.level < 1:
        raise InvalidOutlineEntryError(f"level must be >= 1, got {entry.level}", index=index, entry=entry)
    if entry.section_end <= entry.pos:
        raise InvalidOutlineEntryError(
            f"section_end ({entry.section_end}) must be greater than pos ({entry.pos})", index=index, entry=entry
        )
    if previous_pos is not None and entry.pos <= previous_pos:
        raise InvalidOutlineEntryError(
            f"entries must be in ascending pos order ({entry.pos} follows {previous_pos})", index=index, entry=entry
        )
