# src/ib_app/modules/browse/display.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

import cv2
import numpy as np
from PIL import Image

from ib_app.core.logging import get_logger

__all__ = ["DisplaySurface", "OpenCvDisplay", "to_bgr"]

log = get_logger(__name__)


@runtime_checkable
class DisplaySurface(Protocol):
    def show(self, raster: Image.Image) -> int: ...
    def close(self) -> None: ...


def to_bgr(raster: Image.Image) -> np.ndarray:
    """Pillow image -> contiguous uint8 BGR array for OpenCV."""
    if raster.mode != "RGB":
        raster = raster.convert("RGB")
    return cv2.cvtColor(np.asarray(raster), cv2.COLOR_RGB2BGR)


class OpenCvDisplay:
    """
    One auto-sized HighGUI window in the top-left corner of the screen.
    The window is created on the first `show` so that a run that never
    shows anything never opens one.
    """

    def __init__(self, window_name: str = "Browser") -> None:
        self.window_name = window_name
        self._open = False

    def _ensure_window(self) -> None:
        if self._open:
            return
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
        cv2.moveWindow(self.window_name, 0, 0)
        self._open = True

    def show(self, raster: Image.Image) -> int:
        """Draw `raster` and block until a key is pressed; returns its low byte."""
        self._ensure_window()
        cv2.imshow(self.window_name, to_bgr(raster))
        key = cv2.waitKey(0)
        return key & 0xFF

    def close(self) -> None:
        if not self._open:
            return
        cv2.destroyWindow(self.window_name)
        # HighGUI only tears the window down while processing events
        cv2.waitKey(1)
        self._open = False
