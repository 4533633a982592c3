from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RevealCoordinator:
    """Hold at most one pending deferred reveal and fire it later.

    The reveal must not run in the same tick as the render that triggered
    it: the host needs its root items before it can locate a nested one.
    A newer request replaces a pending one (last write wins).

    Parameters
    ----------
    schedule_ui : Callable[[int, Callable[[], None]], object], optional
        Tk-style scheduler (e.g., widget.after) returning a cancel handle.
        When omitted, requests stay in the pending slot until :meth:`flush`.
    cancel_ui : Callable[[object], None], optional
        Cancels a handle returned by ``schedule_ui`` (e.g., widget.after_cancel).
    delay_ms : int, default=50
        Delay passed to ``schedule_ui``.
    """

    def __init__(
        self,
        *,
        schedule_ui: Optional[Callable[[int, Callable[[], None]], Any]] = None,
        cancel_ui: Optional[Callable[[Any], None]] = None,
        delay_ms: int = 50,
    ) -> None:
        self._schedule_ui = schedule_ui
        self._cancel_ui = cancel_ui
        self._delay_ms = max(0, int(delay_ms))
        self._job_seq: int = 0
        self._handle: Any = None
        self._pending: Optional[Callable[[], None]] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def bind_scheduler(
        self,
        schedule_ui: Optional[Callable[[int, Callable[[], None]], Any]],
        cancel_ui: Optional[Callable[[Any], None]] = None,
    ) -> None:
        """Late injection of the scheduler (hosts attach after construction)."""
        self.cancel()
        self._schedule_ui = schedule_ui
        self._cancel_ui = cancel_ui

    def request(self, callback: Callable[[], None]) -> None:
        """Replace any pending reveal with ``callback`` and schedule it."""
        self.cancel()
        self._job_seq += 1
        job_id = self._job_seq
        self._pending = callback
        if self._schedule_ui is None:
            return
        try:
            self._handle = self._schedule_ui(self._delay_ms, lambda: self._fire(job_id))
        except Exception:
            # Scheduler gone (e.g. host window destroyed); keep the slot for flush()
            logger.debug("Reveal scheduling failed; request kept pending", exc_info=True)
            self._handle = None

    def cancel(self) -> None:
        """Drop the pending reveal, if any."""
        handle, self._handle = self._handle, None
        self._pending = None
        if handle is not None and self._cancel_ui is not None:
            try:
                self._cancel_ui(handle)
            except Exception:
                logger.debug("Cancelling scheduled reveal failed", exc_info=True)

    def flush(self) -> bool:
        """Run the pending reveal now. Return True if one ran."""
        return self._fire(self._job_seq)

    # ------------------------------------------------------------------
    def _fire(self, job_id: int) -> bool:
        # Superseded callbacks that escaped cancellation are ignored
        if job_id != self._job_seq or self._pending is None:
            return False
        callback = self._pending
        self._pending = None
        self._handle = None
        callback()
        return True
