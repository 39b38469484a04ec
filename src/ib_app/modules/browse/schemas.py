# src/ib_app/modules/browse/schemas.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from ib_app.core.errors import NotFound, PermissionDenied, ScanError


class Bound(BaseModel):
    """Largest frame the viewing surface may show. Immutable for a run."""

    model_config = ConfigDict(frozen=True)

    rows: PositiveInt = Field(..., examples=[1080])
    cols: PositiveInt = Field(..., examples=[1920])


class SubdirPolicy(str, Enum):
    skip = "skip"
    abort = "abort"


class ScanFailureKind(str, Enum):
    not_found = "not_found"
    permission_denied = "permission_denied"
    not_a_directory = "not_a_directory"
    io_error = "io_error"


class ScanFailure(BaseModel):
    kind: ScanFailureKind
    path: str
    message: str

    def to_exception(self) -> Exception:
        text = f"{self.message}: {self.path}"
        if self.kind in (ScanFailureKind.not_found, ScanFailureKind.not_a_directory):
            return NotFound(text)
        if self.kind == ScanFailureKind.permission_denied:
            return PermissionDenied(text)
        return ScanError(text)


class SkippedDirectory(BaseModel):
    path: str
    reason: str


class ScanResult(BaseModel):
    root: str
    files: list[str] = Field(default_factory=list)
    skipped: list[SkippedDirectory] = Field(
        default_factory=list,
        description="Subdirectories that could not be listed under SubdirPolicy.skip.",
    )
    failure: ScanFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure.to_exception()


class FrameInfo(BaseModel):
    """What is about to be shown: catalog position plus the original resolution."""

    index: int = Field(..., ge=0)
    path: str
    cols: int = Field(..., ge=1)
    rows: int = Field(..., ge=1)
    total: int = Field(..., ge=1, description="Catalog length when the frame was shown.")


class StopReason(str, Enum):
    quit = "quit"
    exhausted = "exhausted"


class NavigationOutcome(BaseModel):
    reason: StopReason
    frames_shown: int = Field(0, ge=0)
    pruned: int = Field(0, ge=0)
    remaining: int = Field(0, ge=0)
