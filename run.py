# -*- coding: utf-8 -*-

"""
Main entry point for launching the Outline Toolkit workbench.

Usage: ``python run.py [FILE]``
"""

import sys
import tkinter as tk
import logging

from outline_toolkit.logging_config import setup_logging
from outline_toolkit.app import OutlineWorkbench


def main():
    """
    Configure logging, main window, and launch application.
    """
    setup_logging()

    root = tk.Tk()
    window_width, window_height = 1000, 680
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    # Use modern theme if available
    try:
        from sv_ttk import set_theme
        set_theme("light")
    except ImportError:
        print("Warning: 'sv-ttk' theme is not installed.")

    path = sys.argv[1] if len(sys.argv) > 1 else None
    OutlineWorkbench(root, path=path)

    root.mainloop()


if __name__ == '__main__':
    main()

    logging.info("===== Application terminated =====")
