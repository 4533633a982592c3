from __future__ import annotations

"""Cursor offset to active node and ancestor path.

:func:`locate` is the pure traversal. :class:`ActiveTracker` memoizes it so
the path is recomputed only when the cursor offset or the installed forest
changes, never on render.
"""

from typing import List, Optional, Sequence

from outline_toolkit.core.models import ActivePath, OutlineNode

__all__ = ["locate", "ActiveTracker"]

_NO_ACTIVE = ActivePath()


def locate(roots: Sequence[OutlineNode], offset: Optional[int]) -> ActivePath:
    """Return the deepest node whose section contains ``offset``.

    Single depth-first pass. Section ranges are nested and disjoint among
    siblings, so once a containing node is found at a level its remaining
    siblings are not visited. ``None`` or an offset outside every root gives
    an empty path.
    """
    if offset is None:
        return _NO_ACTIVE

    ancestors: List[OutlineNode] = []
    nodes: Sequence[OutlineNode] = roots
    active: Optional[OutlineNode] = None
    while True:
        container = next((n for n in nodes if n.contains(offset)), None)
        if container is None:
            break
        if active is not None:
            ancestors.append(active)
        active = container
        nodes = container.children

    if active is None:
        return _NO_ACTIVE
    return ActivePath(active=active, ancestors=frozenset(ancestors))


class ActiveTracker:
    """Memoized :func:`locate` over the currently displayed forest.

    Parameters
    ----------
    roots : Sequence[OutlineNode], optional
        Initial forest roots.

    Notes
    -----
    The tracker is keyed on the identity of the installed roots list and on
    the offset value. Installing the same list object again is a no-op.
    """

    def __init__(self, roots: Optional[Sequence[OutlineNode]] = None) -> None:
        self._roots: Sequence[OutlineNode] = roots if roots is not None else []
        self._offset: Optional[int] = None
        self._path: ActivePath = _NO_ACTIVE
        self._stale = False

    @property
    def offset(self) -> Optional[int]:
        return self._offset

    @property
    def path(self) -> ActivePath:
        if self._stale:
            self._path = locate(self._roots, self._offset)
            self._stale = False
        return self._path

    @property
    def active(self) -> Optional[OutlineNode]:
        return self.path.active

    def install(self, roots: Sequence[OutlineNode]) -> bool:
        """Install a new forest. Return True if the forest actually changed."""
        if roots is self._roots:
            return False
        self._roots = roots
        self._stale = True
        return True

    def set_offset(self, offset: Optional[int]) -> bool:
        """Track a new cursor offset. Return True if the offset changed."""
        if offset == self._offset:
            return False
        self._offset = offset
        self._stale = True
        return True
