"""Tkinter widgets hosting the outline panel."""

from .outline_filter_widget import OutlineFilterWidget
from .outline_tree_widget import OutlineTreeWidget

__all__ = ["OutlineFilterWidget", "OutlineTreeWidget"]
