# src/ib_app/core/screen.py
from __future__ import annotations

from ib_app.core.logging import get_logger

log = get_logger(__name__)


def detect_screen_size() -> tuple[int, int] | None:
    """
    (rows, cols) of the primary screen, or None when there is no display
    to ask (headless session, Tk not built into this interpreter).
    """
    try:
        import tkinter
    except ImportError:
        log.debug("tkinter unavailable; cannot detect screen size")
        return None

    try:
        root = tkinter.Tk()
    except tkinter.TclError as e:
        log.debug("No display for screen detection: %s", e)
        return None
    try:
        root.withdraw()
        rows, cols = root.winfo_screenheight(), root.winfo_screenwidth()
    finally:
        root.destroy()
    if rows < 1 or cols < 1:
        return None
    return rows, cols
