# src/ib_app/modules/browse/service.py
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ib_app.core.errors import EmptyCatalog
from ib_app.core.logging import get_logger
from ib_app.core.progress import ProgressReporter

from .catalog import Catalog
from .display import DisplaySurface
from .enumerator import enumerate_files
from .image_source import ImageSource, PillowImageSource
from .navigator import Navigator
from .schemas import Bound, FrameInfo, NavigationOutcome, ScanResult, SubdirPolicy

log = get_logger(__name__)


class BrowseService:
    """Wires scanning, pruning, scaling and display into one browsing run."""

    def __init__(self, display: DisplaySurface, source: ImageSource | None = None) -> None:
        self.display = display
        self.source = source or PillowImageSource()
        self.last_scan: ScanResult | None = None

    # ---- public API ----------------------------------------------------------
    def build_catalog(
        self,
        root: Path | str,
        policy: SubdirPolicy = SubdirPolicy.skip,
        sort_entries: bool = False,
        reporter: ProgressReporter | None = None,
    ) -> Catalog:
        """
        Scan `root` into a Catalog. Raises NotFound / PermissionDenied /
        ScanError when the scan fails, EmptyCatalog when it finds nothing.
        """
        result = enumerate_files(
            root, policy=policy, sort_entries=sort_entries, reporter=reporter
        )
        self.last_scan = result
        result.raise_for_failure()
        if not result.files:
            raise EmptyCatalog(f"no files found under {result.root}")
        return Catalog(result.files)

    def browse(
        self,
        catalog: Catalog,
        bound: Bound,
        on_frame: Callable[[FrameInfo], None] | None = None,
    ) -> NavigationOutcome:
        """Run the viewing loop until quit or exhaustion; always closes the display."""
        try:
            nav = Navigator(catalog, self.source, self.display, bound, on_frame=on_frame)
            outcome = nav.run()
        finally:
            self.display.close()
        if outcome.frames_shown == 0:
            log.warning("No decodable images among %d file(s)", outcome.pruned)
        return outcome
