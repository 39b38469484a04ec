# src/ib_app/commands/browse.py
"""
The 'browse' command: step through every image under a folder.

Keys while the window has focus:
- n / space : next image
- p         : previous image (stays put on the first one)
- q         : quit
Anything else redisplays the current image.
"""

from __future__ import annotations

import typer
from rich.console import Console

from ib_app.core.config import load_settings
from ib_app.core.errors import IbAppError, exit_code_for
from ib_app.core.logging import configure_logging, get_logger
from ib_app.core.rich_progress import make_phase_progress
from ib_app.modules.browse.display import OpenCvDisplay
from ib_app.modules.browse.schemas import FrameInfo, NavigationOutcome, SubdirPolicy
from ib_app.modules.browse.service import BrowseService
from ib_app.modules.browse.viewport import resolve_bound
from ib_app.version import get_version

__all__ = ["register"]

log = get_logger(__name__)

USAGE_EXIT_CODE = 1


def _help_callback(ctx: typer.Context, value: bool) -> None:
    # Usage is an error exit, like a missing directory.
    if value and not ctx.resilient_parsing:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=USAGE_EXIT_CODE)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"image-browser {get_version()}")
        raise typer.Exit()


def format_frame_line(info: FrameInfo) -> str:
    """Index, path and original resolution, e.g. '    3. <path>\\t640x480'."""
    return f"{info.index:>5}. {info.path:>60}\t{info.cols}x{info.rows}"


def _summary(outcome: NavigationOutcome) -> str:
    return (
        f"Done ({outcome.reason.value}): {outcome.frames_shown} frame(s) shown, "
        f"{outcome.pruned} non-image file(s) skipped."
    )


def register(app: typer.Typer) -> None:
    """Attach the browse command to the given Typer app."""

    @app.command(
        "browse",
        help="Browse every image under DIRECTORY, depth-first.",
        context_settings={"help_option_names": []},
    )
    def browse_cmd(
        ctx: typer.Context,
        directory: str | None = typer.Argument(
            None, help="Root directory to browse (scanned recursively)."
        ),
        rows: int | None = typer.Option(
            None, "--rows", "-r", min=1, help="Max viewport rows (default: screen height)."
        ),
        cols: int | None = typer.Option(
            None, "--cols", "-c", min=1, help="Max viewport columns (default: screen width)."
        ),
        strict: bool = typer.Option(
            False, "--strict", help="Abort when any subdirectory cannot be read."
        ),
        sort_entries: bool = typer.Option(
            False, "--sorted", help="Sort entries by name inside each directory."
        ),
        log_level: str | None = typer.Option(
            None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."
        ),
        version: bool = typer.Option(
            False, "--version", callback=_version_callback, is_eager=True,
            help="Print the version and exit.",
        ),
        help_: bool = typer.Option(
            False, "--help", "-h", callback=_help_callback, is_eager=True,
            help="Show this message and exit (status 1).",
        ),
    ) -> None:
        console = Console(soft_wrap=True)
        err_console = Console(stderr=True, soft_wrap=True)

        def _print_frame(info: FrameInfo) -> None:
            # Plain echo: Rich would expand the tab.
            typer.echo(format_frame_line(info))

        try:
            settings = load_settings()
            configure_logging(log_level or settings.LOG_LEVEL, json=settings.LOG_JSON)

            if not directory:
                typer.echo(ctx.get_help())
                raise typer.Exit(code=USAGE_EXIT_CODE)

            policy = SubdirPolicy.abort if strict else settings.SUBDIR_POLICY
            sort_entries = sort_entries or settings.SORT_ENTRIES

            svc = BrowseService(display=OpenCvDisplay(settings.WINDOW_NAME))
            bound = resolve_bound(rows, cols, settings)
            progress, reporter = make_phase_progress(console)
            with progress:
                catalog = svc.build_catalog(
                    directory, policy=policy, sort_entries=sort_entries, reporter=reporter
                )
            if svc.last_scan and svc.last_scan.skipped:
                err_console.print(
                    f"Skipped {len(svc.last_scan.skipped)} unreadable folder(s).",
                    style="yellow",
                    markup=False,
                )
            outcome = svc.browse(catalog, bound, on_frame=_print_frame)
        except IbAppError as e:
            log.debug("Fatal: %r", e)
            err_console.print(f"Error: {e}", style="bold red", markup=False, highlight=False)
            raise typer.Exit(code=exit_code_for(e)) from e

        console.print(_summary(outcome), style="bold green", markup=False)
