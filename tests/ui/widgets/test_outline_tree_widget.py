import time
import tkinter as tk

import pytest

from outline_toolkit.core.models import OutlineSettings
from outline_toolkit.ui.controllers.outline_controller import OutlineController
from outline_toolkit.ui.widgets.outline_tree_widget import OutlineTreeWidget


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = pytest.mark.skipif(
    not _can_create_tk_root(),
    reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
)


@pytest.fixture
def tk_root():
    root = tk.Tk()
    # Avoid showing a window during tests
    root.withdraw()
    yield root
    try:
        root.update_idletasks()
    except tk.TclError:
        pass
    root.destroy()


@pytest.fixture
def controller():
    return OutlineController(OutlineSettings(reveal_delay_ms=1))


@pytest.fixture
def activated():
    return []


@pytest.fixture
def widget(tk_root, controller, activated):
    w = OutlineTreeWidget(tk_root, controller, on_item_activated=activated.append)
    w.pack(fill="both", expand=True)
    return w


def _rows(widget):
    """(text, depth) for every row in display order."""
    result = []
    for iid in widget.iter_item_ids():
        depth = 0
        parent = widget._tree.parent(iid)
        while parent:
            depth += 1
            parent = widget._tree.parent(parent)
        result.append((widget.row_text(iid), depth))
    return result


def _iid(widget, label):
    for iid in widget.iter_item_ids():
        if widget.get_item(iid).label == label:
            return iid
    raise AssertionError(f"no row for {label!r}")


def _settle(root, wait_s: float = 0.02):
    root.update_idletasks()
    time.sleep(wait_s)
    root.update()


def test_renders_nested_rows(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()

    assert _rows(widget) == [
        ("Alpha", 0),
        ("Setup", 1),
        ("Install", 2),
        ("Usage", 1),
        ("Beta", 0),
        ("Advanced setup", 1),
    ]
    assert widget._tree.set(_iid(widget, "Install"), "level") == "H3"


def test_active_path_rows_are_marked_and_kept(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()
    before = {widget.get_item(iid).label: iid for iid in widget.iter_item_ids()}

    controller.set_active_selection(25)
    _settle(tk_root)

    after = {widget.get_item(iid).label: iid for iid in widget.iter_item_ids()}
    assert after == before
    assert widget.row_text(after["Install"]) == "● Install"
    assert widget.row_text(after["Alpha"]) == "› Alpha"
    assert widget.row_text(after["Beta"]) == "Beta"
    assert "active" in widget._tree.item(after["Install"], "tags")


def test_deferred_reveal_selects_active_row(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()
    widget._tree.item(_iid(widget, "Beta"), open=False)

    controller.set_active_selection(150)
    _settle(tk_root)

    iid = _iid(widget, "Advanced setup")
    assert widget._tree.selection() == (iid,)
    assert widget.is_item_open(_iid(widget, "Beta"))
    assert widget.get_selected_item().label == "Advanced setup"


def test_reveal_active_opens_collapsed_ancestors(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()
    for label in ("Alpha", "Setup"):
        widget._tree.item(_iid(widget, label), open=False)

    controller.set_active_selection(25)
    tk_root.update_idletasks()
    assert controller.reveal_active() is True

    assert widget.is_item_open(_iid(widget, "Alpha"))
    assert widget.is_item_open(_iid(widget, "Setup"))
    assert widget._tree.selection() == (_iid(widget, "Install"),)


def test_collapsed_default_opens_only_active_path(tk_root, doc_entries):
    ctrl = OutlineController(OutlineSettings(default_expanded=False, reveal_delay_ms=1))
    w = OutlineTreeWidget(tk_root, ctrl)
    ctrl.set_outline(doc_entries)
    ctrl.set_active_selection(25)
    tk_root.update_idletasks()

    assert w.is_item_open(_iid(w, "Alpha"))
    assert w.is_item_open(_iid(w, "Setup"))
    assert not w.is_item_open(_iid(w, "Beta"))


def test_user_collapse_survives_rebuild(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()
    beta = _iid(widget, "Beta")
    widget._tree.focus(beta)
    widget._tree.item(beta, open=False)
    widget._on_toggle_event(False)

    controller.set_outline(doc_entries)
    tk_root.update_idletasks()

    new_beta = _iid(widget, "Beta")
    assert new_beta != beta
    assert not widget.is_item_open(new_beta)
    assert widget.is_item_open(_iid(widget, "Alpha"))


def test_filter_redraws_rows(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()

    controller.set_filter("install")
    tk_root.update_idletasks()
    assert _rows(widget) == [("Alpha", 0), ("Setup", 1), ("Install", 2)]

    controller.set_filter("zzz")
    tk_root.update_idletasks()
    assert _rows(widget) == []

    controller.clear_filter()
    tk_root.update_idletasks()
    assert len(_rows(widget)) == 6


def test_return_activates_focused_row(tk_root, widget, controller, doc_entries, activated):
    offsets = []
    controller.set_navigation_handler(offsets.append)
    controller.set_outline(doc_entries)
    tk_root.update_idletasks()
    widget._tree.focus(_iid(widget, "Usage"))

    assert widget._on_return_event(None) == "break"

    assert offsets == [50]
    assert [i.label for i in activated] == ["Usage"]


def test_empty_heading_shows_placeholder(tk_root, widget, controller):
    controller.set_outline([{"level": 1, "text": "", "pos": 0, "sectionEnd": 5}])
    tk_root.update_idletasks()

    assert _rows(widget) == [("(Untitled)", 0)]


def test_destroy_detaches_from_controller(tk_root, widget, controller, doc_entries):
    controller.set_outline(doc_entries)
    controller.set_active_selection(25)
    tk_root.update_idletasks()

    widget.destroy()
    controller.refresh()

    assert controller.reveal_active() is False
