# src/ib_app/modules/browse/enumerator.py
"""
Depth-first file enumeration.

Every non-directory entry below the root is listed, in the order the
filesystem reports it, with each subdirectory expanded in place before the
scan moves on to the next sibling. Directory classification uses a no-follow
stat (lstat) rather than the dirent type hint, which some filesystems leave
unset or get wrong. Symlinks are never followed.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

from ib_app.core.logging import get_logger
from ib_app.core.progress import ProgressReporter

from .schemas import (
    ScanFailure,
    ScanFailureKind,
    ScanResult,
    SkippedDirectory,
    SubdirPolicy,
)

__all__ = ["enumerate_files", "is_directory"]

log = get_logger(__name__)


def is_directory(entry: os.DirEntry) -> bool:
    """Authoritative directory test: lstat, never the cached d_type."""
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError:
        # Vanished between readdir and stat; let the decoder reject it later.
        return False
    return stat.S_ISDIR(st.st_mode)


def _failure_kind(exc: OSError) -> ScanFailureKind:
    if isinstance(exc, FileNotFoundError):
        return ScanFailureKind.not_found
    if isinstance(exc, NotADirectoryError):
        return ScanFailureKind.not_a_directory
    if isinstance(exc, PermissionError):
        return ScanFailureKind.permission_denied
    return ScanFailureKind.io_error


def _list_dir(path: str, sort_entries: bool) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        entries = list(it)
    if sort_entries:
        entries.sort(key=lambda e: e.name)
    return entries


def enumerate_files(
    root: str | Path,
    *,
    policy: SubdirPolicy = SubdirPolicy.skip,
    sort_entries: bool = False,
    reporter: ProgressReporter | None = None,
) -> ScanResult:
    """
    Scan `root` depth-first and return every non-directory path below it.

    Failure to open `root` itself is reported through `ScanResult.failure`.
    A subdirectory that cannot be listed is skipped with a warning under
    `SubdirPolicy.skip`, or ends the scan with a failure under `abort`.
    """
    root_s = os.fspath(root)
    result = ScanResult(root=root_s)

    try:
        top = _list_dir(root_s, sort_entries)
    except OSError as exc:
        result.failure = ScanFailure(
            kind=_failure_kind(exc),
            path=root_s,
            message=exc.strerror or exc.__class__.__name__,
        )
        return result

    if reporter:
        reporter.start("scan", total=None, text=root_s)

    # Stack of per-directory iterators; the top one is the directory being walked.
    stack: list[Iterator[os.DirEntry]] = [iter(top)]
    try:
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            if not is_directory(entry):
                result.files.append(entry.path)
                if reporter:
                    reporter.update("scan", 1, text=entry.name)
                continue

            try:
                children = _list_dir(entry.path, sort_entries)
            except OSError as exc:
                reason = exc.strerror or exc.__class__.__name__
                if policy == SubdirPolicy.abort:
                    log.error("Cannot list %s (%s); aborting scan", entry.path, reason)
                    result.failure = ScanFailure(
                        kind=_failure_kind(exc), path=entry.path, message=reason
                    )
                    return result
                log.warning("Skipping unreadable directory %s (%s)", entry.path, reason)
                result.skipped.append(SkippedDirectory(path=entry.path, reason=reason))
                continue

            stack.append(iter(children))
    finally:
        if reporter:
            reporter.end("scan")

    log.info(
        "Scanned %s: %d file(s), %d skipped dir(s)",
        root_s,
        len(result.files),
        len(result.skipped),
    )
    return result
