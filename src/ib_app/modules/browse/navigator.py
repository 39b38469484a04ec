# src/ib_app/modules/browse/navigator.py
"""
Keyboard-driven walk over a Catalog.

State is a single cursor. Each step decodes (pruning as needed) the entry
under the cursor, fits it to the bound, shows it, and applies the pressed key
through `next_cursor`, which is the whole transition table.
"""

from __future__ import annotations

from collections.abc import Callable

from ib_app.core.errors import BrowseError, EmptyCatalog, EndOfCatalog, IbAppError
from ib_app.core.logging import get_logger

from .catalog import Catalog, CatalogPruner
from .display import DisplaySurface
from .image_source import ImageSource
from .scaler import fit
from .schemas import Bound, FrameInfo, NavigationOutcome, StopReason

__all__ = [
    "KEY_NEXT",
    "KEY_PREV",
    "KEY_QUIT",
    "KEY_SPACE",
    "Navigator",
    "next_cursor",
]

log = get_logger(__name__)

KEY_QUIT = ord("q")
KEY_NEXT = ord("n")
KEY_SPACE = ord(" ")
KEY_PREV = ord("p")


def next_cursor(cursor: int, key: int) -> int | None:
    """
    Cursor to show after `key` was pressed at `cursor`; None means quit.

    'p' on the first entry stays there instead of leaving the catalog.
    Unbound keys redisplay the current entry.
    """
    if key == KEY_QUIT:
        return None
    if key in (KEY_NEXT, KEY_SPACE):
        return cursor + 1
    if key == KEY_PREV:
        if cursor == 0:
            return 0
        return cursor - 1
    return cursor


class Navigator:
    def __init__(
        self,
        catalog: Catalog,
        source: ImageSource,
        display: DisplaySurface,
        bound: Bound,
        on_frame: Callable[[FrameInfo], None] | None = None,
    ) -> None:
        if len(catalog) == 0:
            raise EmptyCatalog("no files to show")
        self.catalog = catalog
        self.pruner = CatalogPruner(catalog, source)
        self.display = display
        self.bound = bound
        self.on_frame = on_frame

        self.cursor = 0
        self.frames_shown = 0
        self.stop_reason: StopReason | None = None

    @property
    def terminated(self) -> bool:
        return self.stop_reason is not None

    def _stop(self, reason: StopReason) -> bool:
        self.stop_reason = reason
        log.info("Stopped (%s) at cursor %d", reason.value, self.cursor)
        return False

    def _current_path(self) -> str:
        if 0 <= self.cursor < len(self.catalog):
            return self.catalog[self.cursor]
        return "<none>"

    def step(self) -> bool:
        """Run one viewing cycle. Returns False once the walk has terminated."""
        if self.terminated:
            return False
        if self.cursor >= len(self.catalog):
            return self._stop(StopReason.exhausted)

        try:
            raster = self.pruner.ensure_valid_at(self.cursor)
        except EndOfCatalog:
            return self._stop(StopReason.exhausted)
        except IbAppError:
            raise
        except Exception as e:
            raise BrowseError(self._current_path(), e) from e

        path = self.catalog[self.cursor]

        def _report(cols: int, rows: int) -> None:
            log.info("Showing %d/%d %s (%dx%d)", self.cursor, len(self.catalog), path, cols, rows)
            if self.on_frame:
                self.on_frame(
                    FrameInfo(
                        index=self.cursor,
                        path=path,
                        cols=cols,
                        rows=rows,
                        total=len(self.catalog),
                    )
                )

        try:
            frame = fit(raster, self.bound, sink=_report)
            key = self.display.show(frame)
        except IbAppError:
            raise
        except Exception as e:
            raise BrowseError(path, e) from e
        self.frames_shown += 1

        target = next_cursor(self.cursor, key)
        if target is None:
            return self._stop(StopReason.quit)
        self.cursor = target
        if self.cursor >= len(self.catalog):
            return self._stop(StopReason.exhausted)
        return True

    def run(self) -> NavigationOutcome:
        while self.step():
            pass
        return NavigationOutcome(
            reason=self.stop_reason or StopReason.exhausted,
            frames_shown=self.frames_shown,
            pruned=len(self.pruner.removed),
            remaining=len(self.catalog),
        )
