from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from outline_toolkit.core.models import (
    DEFAULT_OUTLINE_SETTINGS,
    ActivePath,
    OutlineEntry,
    OutlineForest,
    OutlineNode,
    OutlineSettings,
)
from outline_toolkit.core.services import ActiveTracker, build_tree, coerce_entries, filter_forest, is_blank_term
from outline_toolkit.core.services.tree_builder import EntryLike
from outline_toolkit.ui.controllers.outline_item import CollapsibleState, OutlineTreeItem
from outline_toolkit.ui.interfaces import OutlineTreeHost
from outline_toolkit.ui.tabs.outline.reveal_coordinator import RevealCoordinator

logger = logging.getLogger(__name__)

__all__ = ["OutlineController"]


class OutlineController:
    """Controller adapting outline state to a tree-view host.

    Owns the full forest, the displayed (possibly filtered) forest, the
    active-path tracker and the item cache. Inbound calls (``set_outline``,
    ``set_active_selection``, ``set_filter``, ``clear_filter``) update state
    synchronously and fire the change notification; hosts then pull items
    with :meth:`get_children` / :meth:`get_parent`.

    Parameters
    ----------
    settings : OutlineSettings, optional
        Placeholder label, expansion default and reveal delay.
    on_navigate : Callable[[int], None], optional
        Navigation sink. Receives the document offset of an activated item.
    on_filter_state_changed : Callable[[bool], None], optional
        Invoked when the filter switches between active and inactive.
    schedule_ui, cancel_ui : optional
        Tk-style scheduler pair used for the deferred reveal. Hosts may bind
        their own later through :meth:`set_tree_view`.

    Notes
    -----
    - No UI toolkit code lives here; the Tk widgets are one host among others.
    - Caches are plain identity-keyed dicts, cleared in bulk whenever a new
      tree or filtered forest is installed.
    - Host and listener failures are logged and never raised to the caller.
      Malformed heading lists do raise (``InvalidOutlineEntryError``) and
      leave the previous outline installed.
    """

    def __init__(
        self,
        settings: Optional[OutlineSettings] = None,
        *,
        on_navigate: Optional[Callable[[int], None]] = None,
        on_filter_state_changed: Optional[Callable[[bool], None]] = None,
        schedule_ui: Optional[Callable[[int, Callable[[], None]], Any]] = None,
        cancel_ui: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.settings: OutlineSettings = settings or DEFAULT_OUTLINE_SETTINGS
        self._on_navigate = on_navigate
        self._on_filter_state_changed = on_filter_state_changed

        self._entries: List[OutlineEntry] = []
        self._forest: OutlineForest = OutlineForest()
        self._displayed: OutlineForest = self._forest
        self._filter_text: str = ""
        self._tracker = ActiveTracker(self._displayed.roots)

        self._item_cache: Dict[OutlineNode, OutlineTreeItem] = {}
        self._tree_view: Optional[OutlineTreeHost] = None
        self._pending_reveal: bool = False
        self._reveal = RevealCoordinator(
            schedule_ui=schedule_ui,
            cancel_ui=cancel_ui,
            delay_ms=self.settings.reveal_delay_ms,
        )
        self._change_listeners: List[Callable[[], None]] = []

    # ---------------------------------------------------------------------------------
    # Wiring
    # ---------------------------------------------------------------------------------

    def set_tree_view(
        self,
        view: Optional[OutlineTreeHost],
        *,
        schedule_ui: Optional[Callable[[int, Callable[[], None]], Any]] = None,
        cancel_ui: Optional[Callable[[Any], None]] = None,
    ) -> None:
        """Attach the host that receives reveal requests.

        When ``schedule_ui`` is given it replaces the reveal scheduler, so a
        Tk host can pass its own ``after``/``after_cancel``. Binding a
        scheduler drops a reveal that is still waiting.

        Without a scheduler (here or at construction) deferred reveals are
        never delivered: each request stays pending until the next one
        replaces it. Such hosts should call :meth:`reveal_active` themselves
        once their render pass is done.
        """
        self._tree_view = view
        if schedule_ui is not None:
            self._reveal.bind_scheduler(schedule_ui, cancel_ui)

    def set_navigation_handler(self, handler: Optional[Callable[[int], None]]) -> None:
        self._on_navigate = handler

    def set_filter_state_handler(self, handler: Optional[Callable[[bool], None]]) -> None:
        self._on_filter_state_changed = handler

    def add_change_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a parameterless re-render listener. Returns an unsubscribe callable."""
        self._change_listeners.append(listener)

        def _remove() -> None:
            self.remove_change_listener(listener)

        return _remove

    def remove_change_listener(self, listener: Callable[[], None]) -> None:
        try:
            self._change_listeners.remove(listener)
        except ValueError:
            pass

    def dispose(self) -> None:
        """Cancel pending work and drop every host reference."""
        self._reveal.cancel()
        self._pending_reveal = False
        self._change_listeners.clear()
        self._tree_view = None
        self._item_cache.clear()

    # ---------------------------------------------------------------------------------
    # Read-only state
    # ---------------------------------------------------------------------------------

    @property
    def entries(self) -> List[OutlineEntry]:
        return list(self._entries)

    @property
    def forest(self) -> OutlineForest:
        """The full, unfiltered forest."""
        return self._forest

    @property
    def displayed_forest(self) -> OutlineForest:
        """The forest hosts render: the filtered one while a filter is active."""
        return self._displayed

    @property
    def active_path(self) -> ActivePath:
        return self._tracker.path

    @property
    def active_node(self) -> Optional[OutlineNode]:
        return self._tracker.path.active

    @property
    def active_offset(self) -> Optional[int]:
        return self._tracker.offset

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def has_pending_reveal(self) -> bool:
        return self._pending_reveal or self._reveal.has_pending

    def has_active_filter(self) -> bool:
        return not is_blank_term(self._filter_text)

    # ---------------------------------------------------------------------------------
    # Inbound events
    # ---------------------------------------------------------------------------------

    def set_outline(self, entries: Optional[Iterable[EntryLike]]) -> None:
        """Replace the heading list: full rebuild, re-filter, re-track, refresh.

        Raises
        ------
        InvalidOutlineEntryError
            If ``entries`` cannot form a consistent tree. State is unchanged.
        """
        entries = coerce_entries(entries)
        forest = build_tree(entries)
        self._entries = entries
        self._forest = forest
        self._install(filter_forest(forest, self._filter_text))
        logger.debug("Outline set: %d headings", len(self._entries))
        self.refresh()

    def set_active_selection(self, offset: Optional[int]) -> None:
        """Track the cursor offset; refresh and queue a reveal of the active item."""
        self._tracker.set_offset(offset)
        self._pending_reveal = True
        self.refresh()

    def set_filter(self, term: Optional[str]) -> None:
        """Filter the displayed forest by ``term`` (blank shows everything)."""
        was_active = self.has_active_filter()
        self._filter_text = term or ""
        self._install(filter_forest(self._forest, self._filter_text))
        self._notify_filter_state(was_active)
        self.refresh()

    def clear_filter(self) -> None:
        was_active = self.has_active_filter()
        self._filter_text = ""
        self._install(self._forest)
        self._notify_filter_state(was_active)
        self.refresh()

    # ---------------------------------------------------------------------------------
    # Host capability
    # ---------------------------------------------------------------------------------

    def get_tree_item(self, item: OutlineTreeItem) -> OutlineTreeItem:
        return item

    def get_children(self, item: Optional[OutlineTreeItem] = None) -> List[OutlineTreeItem]:
        """Return items for ``item``'s children, or for the displayed roots.

        Asking for the roots also schedules a pending reveal: the host has
        begun a render pass, and the reveal runs once that pass yields.
        """
        nodes = item.node.children if item is not None else self._displayed.roots
        items = [self._item_for(node) for node in nodes]

        if item is None and self._pending_reveal:
            self._pending_reveal = False
            self.reveal()
        return items

    def get_parent(self, item: OutlineTreeItem) -> Optional[OutlineTreeItem]:
        """Return the parent item, creating it if the host never rendered it."""
        parent = self._displayed.parent_of.get(item.node)
        if parent is None:
            return None
        return self._item_for(parent)

    def reveal(self) -> None:
        """Schedule a deferred reveal of the active item (latest request wins)."""
        self._reveal.request(self._do_reveal_active)

    def reveal_active(self, view: Optional[OutlineTreeHost] = None) -> bool:
        """Reveal the active item now, taking focus. Return True on success."""
        return self._reveal_active(view or self._tree_view, focus=True)

    def refresh(self) -> None:
        """Fire the change notification."""
        for listener in list(self._change_listeners):
            try:
                listener()
            except Exception:
                logger.exception("Outline change listener failed")

    def activate(self, item: OutlineTreeItem) -> int:
        """Emit the navigation intent for ``item`` and return its offset."""
        offset = item.target_offset
        if self._on_navigate is not None:
            try:
                self._on_navigate(offset)
            except Exception:
                logger.exception("Navigation to offset %d failed", offset)
        return offset

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _install(self, displayed: OutlineForest) -> None:
        self._displayed = displayed
        self._item_cache.clear()
        self._tracker.install(displayed.roots)

    def _item_for(self, node: OutlineNode) -> OutlineTreeItem:
        state = self._tracker.path.state_of(node)
        cached = self._item_cache.get(node)
        if cached is not None and cached.state is state:
            cached.collapsible_state = self._collapsible_state(node)
            return cached
        item = OutlineTreeItem(
            node,
            state,
            self._collapsible_state(node),
            untitled_label=self.settings.untitled_label,
        )
        self._item_cache[node] = item
        return item

    def _collapsible_state(self, node: OutlineNode) -> CollapsibleState:
        if not node.children:
            return CollapsibleState.NONE
        if self._tracker.path.is_on_path(node) or self.settings.default_expanded:
            return CollapsibleState.EXPANDED
        return CollapsibleState.COLLAPSED

    def _do_reveal_active(self) -> None:
        self._reveal_active(self._tree_view, focus=False)

    def _reveal_active(self, view: Optional[OutlineTreeHost], *, focus: bool) -> bool:
        active = self._tracker.path.active
        if view is None or active is None:
            return False
        item = self._item_for(active)
        try:
            view.reveal(item, expand=True, select=True, focus=focus)
        except Exception:
            # Cosmetic: a disposed or busy host simply does not scroll
            logger.warning("Outline reveal failed", exc_info=True)
            return False
        return True

    def _notify_filter_state(self, was_active: bool) -> None:
        now_active = self.has_active_filter()
        if now_active == was_active or self._on_filter_state_changed is None:
            return
        try:
            self._on_filter_state_changed(now_active)
        except Exception:
            logger.exception("Filter state listener failed")
