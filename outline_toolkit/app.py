# -*- coding: utf-8 -*-
"""Tk-based workbench for Outline Toolkit.

A Markdown text pane next to a live outline panel. Exposes the
:class:`OutlineWorkbench` widget, which is instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from outline_toolkit.config import ConfigManager
from outline_toolkit.core.exceptions import OutlineError
from outline_toolkit.core.models import OutlineSettings
from outline_toolkit.core.services import extract_outline
from outline_toolkit.ui.controllers.outline_controller import OutlineController
from outline_toolkit.ui.widgets import OutlineFilterWidget, OutlineTreeWidget

logger = logging.getLogger(__name__)

__all__ = ["OutlineWorkbench"]


class OutlineWorkbench:
    """Main application widget: editor pane plus outline panel.

    Edits re-extract the heading list after ``update_delay_ms`` of quiet,
    cursor moves update the active heading, and activating an outline row
    moves the editor cursor to that heading.
    """

    def __init__(
        self,
        root: tk.Tk,
        path: Optional[str] = None,
        settings: Optional[OutlineSettings] = None,
    ) -> None:
        self.root = root
        self.settings = settings or OutlineSettings.from_config(ConfigManager().get_outline_config())
        self.path: Optional[Path] = None

        self._update_job: Optional[str] = None
        self._last_offset: Optional[int] = None

        self.controller = OutlineController(
            self.settings,
            on_navigate=self._on_navigate,
            on_filter_state_changed=self._on_filter_state_changed,
        )

        self._build_layout()
        self._bind_shortcuts()
        self.controller.add_change_listener(self._update_breadcrumb)

        if path:
            self.load_file(path)
        else:
            self._update_title()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        paned = ttk.PanedWindow(self.root, orient="horizontal")
        paned.pack(fill="both", expand=True)

        outline_frame = ttk.Frame(paned, padding=(6, 6, 0, 6))
        outline_frame.columnconfigure(0, weight=1)
        outline_frame.rowconfigure(2, weight=1)
        ttk.Label(outline_frame, text="Outline").grid(row=0, column=0, sticky="w", pady=(0, 4))
        self.filter_widget = OutlineFilterWidget(outline_frame, on_term_changed=self.controller.set_filter)
        self.filter_widget.grid(row=1, column=0, sticky="ew", pady=(0, 4))
        self.tree_widget = OutlineTreeWidget(outline_frame, self.controller)
        self.tree_widget.grid(row=2, column=0, sticky="nsew")

        editor_frame = ttk.Frame(paned, padding=6)
        editor_frame.columnconfigure(0, weight=1)
        editor_frame.rowconfigure(0, weight=1)
        self.text = tk.Text(editor_frame, wrap="word", undo=True)
        text_scroll = ttk.Scrollbar(editor_frame, orient="vertical", command=self.text.yview)
        self.text.configure(yscrollcommand=text_scroll.set)
        self.text.grid(row=0, column=0, sticky="nsew")
        text_scroll.grid(row=0, column=1, sticky="ns")

        self.breadcrumb_var = tk.StringVar(value="")
        ttk.Label(editor_frame, textvariable=self.breadcrumb_var, anchor="w").grid(
            row=1, column=0, columnspan=2, sticky="ew", pady=(4, 0)
        )

        paned.add(outline_frame, weight=1)
        paned.add(editor_frame, weight=3)

        self.text.bind("<<Modified>>", self._on_text_modified, add="+")
        self.text.bind("<KeyRelease>", self._on_cursor_event, add="+")
        self.text.bind("<ButtonRelease-1>", self._on_cursor_event, add="+")

    def _bind_shortcuts(self) -> None:
        self.root.bind_all("<Control-f>", lambda _e: self.filter_widget.focus_entry())
        self.root.bind_all("<Control-period>", lambda _e: self.controller.reveal_active())
        self.root.bind_all("<Control-o>", lambda _e: self.open_file())

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------
    def open_file(self) -> None:
        filepath = filedialog.askopenfilename(
            title="Open a Markdown document",
            filetypes=(("Markdown", "*.md *.markdown"), ("Text", "*.txt"), ("All files", "*.*")),
        )
        if filepath:
            self.load_file(filepath)

    def load_file(self, filepath: str) -> None:
        try:
            content = Path(filepath).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not open %s: %s", filepath, exc)
            messagebox.showerror("Open failed", f"Could not open {filepath}:\n{exc}")
            return
        self.path = Path(filepath)
        self.text.delete("1.0", "end")
        self.text.insert("1.0", content)
        self.text.mark_set("insert", "1.0")
        self.text.edit_reset()
        self.text.edit_modified(False)
        logger.info("Opened %s (%d chars)", self.path, len(content))
        self._update_title()
        self.refresh_outline()

    # ------------------------------------------------------------------
    # Outline updates
    # ------------------------------------------------------------------
    def refresh_outline(self) -> None:
        """Re-extract headings from the editor and push them to the controller."""
        self._update_job = None
        content = self.text.get("1.0", "end-1c")
        entries = extract_outline(
            content,
            skip_code_blocks=self.settings.skip_code_blocks,
            max_level=self.settings.max_heading_level,
        )
        try:
            self.controller.set_outline(entries)
        except OutlineError:
            logger.exception("Outline rejected; keeping the previous one")
            return
        self._sync_cursor(force=True)

    def _schedule_refresh(self) -> None:
        if self._update_job is not None:
            self.root.after_cancel(self._update_job)
        self._update_job = self.root.after(self.settings.update_delay_ms, self.refresh_outline)

    def _cursor_offset(self) -> int:
        return len(self.text.get("1.0", "insert"))

    def _sync_cursor(self, force: bool = False) -> None:
        offset = self._cursor_offset()
        if not force and offset == self._last_offset:
            return
        self._last_offset = offset
        self.controller.set_active_selection(offset)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_text_modified(self, _event: tk.Event) -> None:
        if not self.text.edit_modified():
            return
        self.text.edit_modified(False)
        self._schedule_refresh()

    def _on_cursor_event(self, _event: tk.Event) -> None:
        self._sync_cursor()

    def _on_navigate(self, offset: int) -> None:
        self.text.mark_set("insert", f"1.0 + {offset} chars")
        self.text.see("insert")
        self.text.focus_set()
        self._sync_cursor()

    def _on_filter_state_changed(self, active: bool) -> None:
        self.filter_widget.set_filter_active(active)

    def _update_breadcrumb(self) -> None:
        active = self.controller.active_node
        if active is None:
            self.breadcrumb_var.set("")
            return
        chain = self.controller.displayed_forest.path_to(active)
        self.breadcrumb_var.set(" › ".join(n.text or self.settings.untitled_label for n in chain))

    def _update_title(self) -> None:
        name = self.path.name if self.path is not None else "untitled"
        self.root.title(f"Outline Toolkit - {name}")
