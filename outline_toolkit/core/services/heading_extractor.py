from __future__ import annotations

"""Markdown heading extraction for the outline engine.

Produces the ordered ``OutlineEntry`` list the engine consumes. Offsets are
character offsets into the source text, which is what a text widget index
like ``"1.0 + N chars"`` counts.

Only ATX headings (``#`` to ``######``) are recognised. Setext headings and
inline Markdown inside heading text are left alone: the text is displayed as
written.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

from outline_toolkit.core.models import OutlineEntry

__all__ = ["compute_outline", "extract_outline"]

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


def compute_outline(headings: Iterable[Mapping[str, Any]], doc_size: int) -> List[OutlineEntry]:
    """Attach section ends to a list of ``{level, text, pos}`` headings.

    A heading's section ends where the next heading of the same or a
    shallower level starts, or at ``doc_size``.
    """
    items = [(int(h["level"]), str(h.get("text") or ""), int(h["pos"])) for h in headings]
    outline: List[OutlineEntry] = []
    for i, (level, text, pos) in enumerate(items):
        section_end = doc_size
        for next_level, _next_text, next_pos in items[i + 1:]:
            if next_level <= level:
                section_end = next_pos
                break
        outline.append(OutlineEntry(level=level, text=text, pos=pos, section_end=section_end))
    return outline


def extract_outline(
    text: Optional[str],
    *,
    skip_code_blocks: bool = True,
    max_level: int = 6,
) -> List[OutlineEntry]:
    """Return the outline entries for a Markdown document.

    Parameters
    ----------
    text : str
        Markdown source.
    skip_code_blocks : bool, default=True
        Ignore ``#`` lines inside fenced (``````` or ``~~~``) code blocks.
    max_level : int, default=6
        Headings deeper than this level are not part of the outline.
    """
    if not text:
        return []

    headings: List[dict] = []
    fence: Optional[str] = None
    offset = 0
    for line in text.splitlines(keepends=True):
        start = offset
        offset += len(line)
        stripped = line.rstrip("\r\n")

        if skip_code_blocks:
            fence_match = _FENCE_RE.match(stripped)
            if fence is None:
                if fence_match:
                    fence = fence_match.group(1)
                    continue
            else:
                if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                    fence = None
                continue

        match = _HEADING_RE.match(stripped)
        if not match:
            continue
        level = len(match.group(1))
        if level > max_level:
            continue
        headings.append({"level": level, "text": (match.group(2) or "").strip(), "pos": start})

    return compute_outline(headings, len(text))
