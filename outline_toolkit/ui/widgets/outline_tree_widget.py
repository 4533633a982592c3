from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional, Set, Tuple

from outline_toolkit.ui.controllers.outline_controller import OutlineController
from outline_toolkit.ui.controllers.outline_item import CollapsibleState, OutlineTreeItem
from outline_toolkit.core.models import ItemState, OutlineNode

logger = logging.getLogger(__name__)

__all__ = ["OutlineTreeWidget"]

_ROW_MARKERS = {
    ItemState.ACTIVE: "● ",
    ItemState.ANCESTOR: "› ",
    ItemState.PLAIN: "",
}

RowKey = Tuple[Tuple[int, str], ...]


class OutlineTreeWidget(ttk.Frame):
    """Tkinter host that renders an :class:`OutlineController` in a Treeview.

    The widget pulls items from the controller on every change notification,
    coalesced to one repaint per idle cycle. Rows are keyed on node
    instances and updated in place, so a refresh that only changes the
    active path restyles a few rows instead of rebuilding the tree.

    Callbacks:
        - on_item_activated: Invoked after double-click or Return on a row,
          with the activated item. The navigation intent itself goes through
          ``controller.activate``.

    Notes
    -----
    - Expansion the user collapses is remembered by heading path (level and
      text from the root) and survives outline rebuilds.
    - Rows on the active path are always opened.
    - Implements :class:`outline_toolkit.ui.interfaces.OutlineTreeHost`.
    """

    def __init__(
        self,
        master: "tk.Widget",
        controller: OutlineController,
        *,
        on_item_activated: Optional[Callable[[OutlineTreeItem], None]] = None,
        height: int = 12,
    ) -> None:
        super().__init__(master)
        self._controller = controller
        self._on_item_activated = on_item_activated

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", columns=("level",), height=height)
        self._tree.column("#0", stretch=True)
        self._tree.column("level", width=36, anchor="e", stretch=False)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=self._vsb.set)

        self._tree.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        try:
            self._tree.tag_configure("active", foreground="#2e7d32", font=("TkDefaultFont", 9, "bold"))
            self._tree.tag_configure("ancestor", foreground="#2e7d32")
        except tk.TclError:
            pass

        # Row bookkeeping for the current tree generation
        self._node_to_iid: Dict[OutlineNode, str] = {}
        self._iid_to_item: Dict[str, OutlineTreeItem] = {}
        self._iid_to_key: Dict[str, RowKey] = {}
        # Session-only: heading paths the user collapsed
        self._collapsed_keys: Set[RowKey] = set()
        self._render_job: Optional[str] = None

        self._tree.bind("<Double-1>", self._on_double_click_event, add="+")
        self._tree.bind("<Return>", self._on_return_event, add="+")
        self._tree.bind("<<TreeviewOpen>>", lambda _e: self._on_toggle_event(True), add="+")
        self._tree.bind("<<TreeviewClose>>", lambda _e: self._on_toggle_event(False), add="+")
        self.bind("<Destroy>", self._on_destroy_event, add="+")

        self._unsubscribe = controller.add_change_listener(self._schedule_render)
        controller.set_tree_view(self, schedule_ui=self.after, cancel_ui=self.after_cancel)
        self.render()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self) -> None:
        """Synchronise rows with the controller's current items."""
        if self._render_job is not None:
            self.after_cancel(self._render_job)
            self._render_job = None
        self._render_now()

    def reveal(
        self,
        item: OutlineTreeItem,
        *,
        expand: bool = True,
        select: bool = True,
        focus: bool = False,
    ) -> None:
        """Open the item's ancestors, scroll it into view and select it."""
        iid = self._iid_for(item)
        if iid is None:
            # Not painted yet (render still queued): paint now and retry
            self.render()
            iid = self._iid_for(item)
        if iid is None:
            raise LookupError(f"Outline item is not displayed: {item!r}")

        parent = self._controller.get_parent(item)
        while parent is not None:
            parent_iid = self._iid_for(parent)
            if parent_iid is not None:
                self._tree.item(parent_iid, open=True)
            parent = self._controller.get_parent(parent)
        if expand and item.has_children:
            self._tree.item(iid, open=True)

        self._tree.see(iid)
        if select:
            self._tree.selection_set(iid)
        self._tree.focus(iid)
        if focus:
            self._tree.focus_set()

    def get_item(self, iid: str) -> Optional[OutlineTreeItem]:
        return self._iid_to_item.get(iid)

    def find_iid(self, item: OutlineTreeItem) -> Optional[str]:
        return self._iid_for(item)

    def get_selected_item(self) -> Optional[OutlineTreeItem]:
        selection = self._tree.selection()
        return self._iid_to_item.get(selection[0]) if selection else None

    def iter_item_ids(self):
        """Yield every row id in display order."""
        def walk(parent: str):
            for iid in self._tree.get_children(parent):
                yield iid
                yield from walk(iid)
        return walk("")

    def is_item_open(self, iid: str) -> bool:
        return bool(self._tree.item(iid, "open"))

    def row_text(self, iid: str) -> str:
        return str(self._tree.item(iid, "text"))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _render_now(self) -> None:
        seen: Dict[OutlineNode, str] = {}
        self._sync_children("", None, (), seen)
        # Forget rows that were deleted along with their parents
        self._node_to_iid = seen
        self._iid_to_item = {iid: self._iid_to_item[iid] for iid in seen.values() if iid in self._iid_to_item}
        self._iid_to_key = {iid: self._iid_to_key[iid] for iid in seen.values() if iid in self._iid_to_key}

    def _iid_for(self, item: OutlineTreeItem) -> Optional[str]:
        iid = self._node_to_iid.get(item.node)
        if iid is None or not self._tree.exists(iid):
            return None
        return iid

    def _sync_children(
        self,
        parent_iid: str,
        parent_item: Optional[OutlineTreeItem],
        parent_key: RowKey,
        seen: Dict[OutlineNode, str],
    ) -> None:
        items = self._controller.get_children(parent_item)
        previous = list(self._tree.get_children(parent_iid))
        wanted: Set[str] = set()

        for index, item in enumerate(items):
            key = parent_key + ((item.node.level, item.node.text),)
            iid = self._node_to_iid.get(item.node)
            if iid is not None and self._tree.exists(iid):
                if self._iid_to_item.get(iid) is not item:
                    self._tree.item(iid, **self._row_options(item))
                if self._tree.parent(iid) != parent_iid or self._tree.index(iid) != index:
                    self._tree.move(iid, parent_iid, index)
            else:
                is_open = item.collapsible_state == CollapsibleState.EXPANDED and key not in self._collapsed_keys
                iid = self._tree.insert(parent_iid, index, open=is_open, **self._row_options(item))
            if item.force_expanded:
                self._tree.item(iid, open=True)

            self._iid_to_item[iid] = item
            self._iid_to_key[iid] = key
            seen[item.node] = iid
            wanted.add(iid)
            self._sync_children(iid, item, key, seen)

        for iid in previous:
            if iid not in wanted and self._tree.exists(iid) and self._tree.parent(iid) == parent_iid:
                self._tree.delete(iid)

    @staticmethod
    def _row_options(item: OutlineTreeItem) -> dict:
        tags: Tuple[str, ...] = ()
        if item.state is ItemState.ACTIVE:
            tags = ("active",)
        elif item.state is ItemState.ANCESTOR:
            tags = ("ancestor",)
        return {
            "text": _ROW_MARKERS[item.state] + " ".join(item.label.split()),
            "values": (item.description,),
            "tags": tags,
        }

    def _schedule_render(self) -> None:
        if self._render_job is not None:
            return
        try:
            self._render_job = self.after_idle(self._on_idle_render)
        except tk.TclError:
            # Widget destroyed between the notification and now
            self._render_job = None

    def _on_idle_render(self) -> None:
        self._render_job = None
        self._render_now()

    def _activate(self, iid: str) -> None:
        item = self._iid_to_item.get(iid)
        if item is None:
            return
        self._controller.activate(item)
        if self._on_item_activated is not None:
            try:
                self._on_item_activated(item)
            except Exception:
                logger.exception("on_item_activated callback failed")

    def _on_double_click_event(self, event: tk.Event) -> Optional[str]:
        iid = self._tree.identify_row(event.y)
        if not iid:
            return None
        self._activate(iid)
        return "break"

    def _on_return_event(self, _event: tk.Event) -> str:
        iid = self._tree.focus()
        if iid:
            self._activate(iid)
        return "break"

    def _on_toggle_event(self, is_opening: bool) -> None:
        key = self._iid_to_key.get(self._tree.focus())
        if key is None:
            return
        if is_opening:
            self._collapsed_keys.discard(key)
        else:
            self._collapsed_keys.add(key)

    def _on_destroy_event(self, event: tk.Event) -> None:
        if event.widget is not self:
            return
        self._unsubscribe()
        self._controller.set_tree_view(None)
        if self._render_job is not None:
            try:
                self.after_cancel(self._render_job)
            except tk.TclError:
                pass
            self._render_job = None
