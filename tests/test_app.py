import tkinter as tk

import pytest

from outline_toolkit.app import OutlineWorkbench
from outline_toolkit.core.models import OutlineSettings


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

DOC = "# Guide\nbody\n## Install\nsteps\n"


@pytest.fixture
def tk_root():
    root = tk.Tk()
    root.withdraw()
    yield root
    root.destroy()


@pytest.fixture
def app(tk_root, tmp_path):
    path = tmp_path / "guide.md"
    path.write_text(DOC, encoding="utf-8")
    return OutlineWorkbench(tk_root, path=str(path), settings=OutlineSettings(reveal_delay_ms=1))


def test_opening_a_file_builds_the_outline(tk_root, app):
    roots = app.controller.forest.roots

    assert [n.text for n in roots] == ["Guide"]
    assert [n.text for n in roots[0].children] == ["Install"]
    assert app.controller.active_node.text == "Guide"
    assert tk_root.title() == "Outline Toolkit - guide.md"


def test_activating_a_heading_moves_the_cursor(app):
    guide = app.controller.get_children()[0]
    install = app.controller.get_children(guide)[0]

    app.controller.activate(install)

    assert app.text.get("insert", "insert lineend") == "## Install"
    assert app.controller.active_node.text == "Install"
    assert app.breadcrumb_var.get() == "Guide › Install"


def test_edits_are_picked_up_on_refresh(app):
    app.text.insert("end", "# Appendix\n")

    app.refresh_outline()

    assert [n.text for n in app.controller.forest.roots] == ["Guide", "Appendix"]


def test_missing_file_keeps_empty_outline(tk_root, tmp_path, monkeypatch):
    errors = []
    monkeypatch.setattr("outline_toolkit.app.messagebox.showerror", lambda *a, **k: errors.append(a))

    wb = OutlineWorkbench(tk_root, path=str(tmp_path / "missing.md"), settings=OutlineSettings())

    assert errors
    assert wb.path is None
    assert wb.controller.get_children() == []
