# src/ib_app/modules/browse/viewport.py
from __future__ import annotations

from collections.abc import Callable

from ib_app.core.config import Settings
from ib_app.core.logging import get_logger
from ib_app.core.screen import detect_screen_size

from .schemas import Bound

log = get_logger(__name__)


def resolve_bound(
    rows: int | None,
    cols: int | None,
    settings: Settings,
    detect: Callable[[], tuple[int, int] | None] = detect_screen_size,
) -> Bound:
    """
    Pick the viewport bound once at startup. Per dimension:
    explicit value > settings (IB_ROWS / IB_COLS) > detected screen > fallback.
    """
    rows = rows or settings.ROWS
    cols = cols or settings.COLS

    if rows is None or cols is None:
        screen = detect()
        if screen is not None:
            log.info("Detected screen %dx%d", screen[1], screen[0])
            rows = rows or screen[0]
            cols = cols or screen[1]

    bound = Bound(
        rows=rows or settings.FALLBACK_ROWS,
        cols=cols or settings.FALLBACK_COLS,
    )
    log.debug("Viewport bound rows=%d cols=%d", bound.rows, bound.cols)
    return bound
