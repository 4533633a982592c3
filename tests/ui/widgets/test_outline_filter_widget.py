import tkinter as tk

import pytest

from outline_toolkit.ui.controllers.outline_controller import OutlineController
from outline_toolkit.ui.widgets.outline_filter_widget import OutlineFilterWidget


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
    root.withdraw()
    yield root
    root.destroy()


def test_term_changes_are_reported_once(tk_root):
    terms = []
    w = OutlineFilterWidget(tk_root, on_term_changed=terms.append)

    w.set_term("set")
    w.set_term("set")
    w.set_term("setup")

    assert terms == ["set", "setup"]
    assert w.get_term() == "setup"


def test_escape_and_clear_always_send_empty(tk_root):
    terms = []
    w = OutlineFilterWidget(tk_root, on_term_changed=terms.append)
    w.set_term("abc")

    assert w._on_escape(None) == "break"
    w._on_clear_clicked()

    assert terms == ["abc", "", ""]
    assert w.get_term() == ""


def test_callback_errors_are_contained(tk_root):
    def boom(_term):
        raise RuntimeError("filter failed")

    w = OutlineFilterWidget(tk_root, on_term_changed=boom)

    w.set_term("x")

    assert w.get_term() == "x"


def test_clear_button_follows_controller_filter_state(tk_root):
    ctrl = OutlineController()
    w = OutlineFilterWidget(tk_root, on_term_changed=ctrl.set_filter)
    ctrl.set_filter_state_handler(w.set_filter_active)
    assert not w.is_clear_enabled()

    w.set_term("intro")
    assert ctrl.filter_text == "intro"
    assert w.is_clear_enabled()

    w.clear()
    assert ctrl.filter_text == ""
    assert not w.is_clear_enabled()
