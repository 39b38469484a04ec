from __future__ import annotations


class IbAppError(Exception):
    """Base application exception."""

    pass


class NotFound(IbAppError):
    pass


class PermissionDenied(IbAppError):
    pass


class ScanError(IbAppError):
    """I/O failure while scanning that is neither NotFound nor PermissionDenied."""

    pass


class ConfigError(IbAppError):
    """Settings (IB_* env vars or .env) failed validation."""

    pass


class EmptyCatalog(IbAppError):
    pass


class DecodeFailure(IbAppError):
    """A file could not be decoded as an image. Recovered locally, never fatal."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class BrowseError(IbAppError):
    """Unexpected failure while showing `path`; always fatal."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class EndOfCatalog(Exception):
    """Not an error: the catalog has no entry left at the cursor."""

    pass


def exit_code_for(exc: BaseException) -> int:
    """
    Convert our exceptions to process exit codes with sensible defaults.
    """
    if isinstance(exc, NotFound):
        return 2
    if isinstance(exc, PermissionDenied):
        return 3
    if isinstance(exc, EmptyCatalog):
        return 4
    # ScanError, ConfigError, BrowseError, anything else
    return 1
