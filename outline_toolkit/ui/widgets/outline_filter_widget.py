from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

logger = logging.getLogger(__name__)

__all__ = ["OutlineFilterWidget"]


class OutlineFilterWidget(ttk.Frame):
    """Filter entry for the outline panel.

    An entry with a clear button. Every edit reports the current term through
    ``on_term_changed``; identical repeated values are not re-sent.

    Parameters
    ----------
    master : tk.Widget
        Parent Tkinter widget.
    on_term_changed : Optional[Callable[[str], None]], optional
        Receives the new filter term. Typically ``controller.set_filter``.
    entry_width : Optional[int], optional
        Character width of the entry.

    Notes
    -----
    - Escape and the clear button (×) empty the term and always notify,
      even if the term was already empty.
    - The clear button is disabled while no filter is active; hosts flip it
      with :meth:`set_filter_active` from the controller's filter-state
      callback.
    - Callback exceptions are logged and never reach the Tkinter mainloop.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_term_changed: Optional[Callable[[str], None]] = None,
        entry_width: Optional[int] = None,
    ) -> None:
        super().__init__(master)

        self._on_term_changed = on_term_changed

        self._term_var = tk.StringVar(value="")
        self._last_notified_term: Optional[str] = None

        # Layout: Entry | Clear
        self.columnconfigure(0, weight=1)

        entry_kwargs = {"textvariable": self._term_var}
        if isinstance(entry_width, int) and entry_width > 0:
            entry_kwargs["width"] = entry_width
        self._entry = ttk.Entry(self, **entry_kwargs)
        self._entry.grid(row=0, column=0, padx=(0, 4), pady=0, sticky="ew")

        self._clear_btn = ttk.Button(self, text="×", width=2, command=self._on_clear_clicked)
        self._clear_btn.grid(row=0, column=1, padx=0, pady=0, sticky="nsew")
        self.set_filter_active(False)

        self._term_var.trace_add("write", self._on_term_var_changed)
        self._entry.bind("<Escape>", self._on_escape, add="+")

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def set_term(self, term: Optional[str]) -> None:
        """Replace the entry text; notifies like a user edit."""
        self._term_var.set(term or "")

    def get_term(self) -> str:
        return self._term_var.get()

    def clear(self) -> None:
        """Empty the entry and send ``""`` unconditionally."""
        # Forget the last term so the write trace re-sends "" even if unchanged
        self._last_notified_term = None
        self.set_term("")

    def set_filter_active(self, active: bool) -> None:
        """Enable the clear button only while a filter is applied."""
        self._clear_btn.state(["!disabled"] if active else ["disabled"])

    def is_clear_enabled(self) -> bool:
        return not self._clear_btn.instate(["disabled"])

    def focus_entry(self) -> None:
        """Give focus to the entry and select its text."""
        self._entry.focus_set()
        self._entry.select_range(0, "end")
        self._entry.icursor("end")

    # ---------------------------------------------------------------------
    # Handlers
    # ---------------------------------------------------------------------
    def _maybe_notify_term_changed(self) -> None:
        if self._on_term_changed is None:
            return
        term = self.get_term()
        if term == self._last_notified_term:
            return
        self._last_notified_term = term
        try:
            self._on_term_changed(term)
        except Exception:
            logger.exception("Filter term callback failed")

    def _on_term_var_changed(self, *_args) -> None:
        self._maybe_notify_term_changed()

    def _on_escape(self, _event: tk.Event) -> str:
        self.clear()
        return "break"

    def _on_clear_clicked(self) -> None:
        self.clear()
