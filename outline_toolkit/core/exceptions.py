from __future__ import annotations

"""Outline engine exception classes.

The engine performs no I/O, so the only failure it reports is a caller
contract violation: a heading list that cannot form a consistent tree.
Host-side failures (reveal on a disposed widget, listener errors) are
handled at the adapter boundary and never surface as these exceptions.
"""

from typing import Any, Optional


class OutlineError(Exception):
    """Base exception for all outline engine errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidOutlineEntryError(OutlineError):
    """Raised when a heading list violates the outline entry contract.

    This includes non-positive levels, empty or inverted section ranges,
    entries out of ascending position order, and children that start
    outside their parent's section range.
    """

    def __init__(self, message: str, index: Optional[int] = None,
                 entry: Optional[Any] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.index = index
        self.entry = entry

    def __str__(self) -> str:
        if self.index is not None:
            return f"invalid outline entry #{self.index}: {super().__str__()}"
        return f"invalid outline entry: {super().__str__()}"
