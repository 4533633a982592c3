from __future__ import annotations

"""Structure-preserving text filter over an outline forest (UI-agnostic).

Kept nodes are shallow copies carrying only their kept children; the input
forest is never mutated. Because the copies are new instances, a fresh
parent map is built for the filtered shape.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from outline_toolkit.core.models import OutlineForest, OutlineNode

logger = logging.getLogger(__name__)

__all__ = ["filter_forest", "matches", "is_blank_term"]


def is_blank_term(term: Optional[str]) -> bool:
    """Return True for ``None``, empty or whitespace-only terms."""
    return not term or not term.strip()


def matches(node: OutlineNode, term: str) -> bool:
    """Case-insensitive substring match of ``term`` against the node text."""
    return term.casefold() in (node.text or "").casefold()


def filter_forest(forest: OutlineForest, term: Optional[str]) -> OutlineForest:
    """Prune ``forest`` to nodes matching ``term`` or leading to a match.

    A blank term returns ``forest`` itself. Otherwise a node is kept iff its
    own text matches or at least one of its children is kept, so every leaf
    of the result is a literal match. No match gives an empty forest.
    """
    if is_blank_term(term):
        return forest

    roots = _prune(forest.roots, term.casefold())

    parent_of: Dict[OutlineNode, Optional[OutlineNode]] = {}
    stack = [(root, None) for root in roots]
    while stack:
        node, parent = stack.pop()
        parent_of[node] = parent
        stack.extend((child, node) for child in node.children)

    logger.debug("Filter %r kept %d of %d headings", term, len(parent_of), len(forest.parent_of))
    return OutlineForest(roots=roots, parent_of=parent_of)


def _prune(roots: List[OutlineNode], needle: str) -> List[OutlineNode]:
    """Post-order walk returning kept copies of ``roots``.

    Each frame holds a node, its unvisited children and the copies kept so
    far; the bottom frame (node ``None``) collects the kept roots. A node's
    copy is made only after all of its children are settled.
    """
    kept_roots: List[OutlineNode] = []
    stack: List[Tuple[Optional[OutlineNode], Iterator[OutlineNode], List[OutlineNode]]] = [
        (None, iter(roots), kept_roots)
    ]
    while stack:
        node, pending, kept = stack[-1]
        child = next(pending, None)
        if child is not None:
            stack.append((child, iter(child.children), []))
            continue
        stack.pop()
        if node is None:
            break
        if kept or needle in (node.text or "").casefold():
            stack[-1][2].append(node.shallow_copy(kept))
    return kept_roots
