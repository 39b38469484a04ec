# src/ib_app/modules/browse/scaler.py
from __future__ import annotations

from collections.abc import Callable

from PIL import Image

from ib_app.core.logging import get_logger

from .schemas import Bound

__all__ = ["ResolutionSink", "fit", "fit_ratio", "fit_size"]

log = get_logger(__name__)

# Receives the original (cols, rows) of every frame before it is shown.
ResolutionSink = Callable[[int, int], None]


def fit_ratio(cols: int, rows: int, bound: Bound) -> float:
    """
    Uniform scale that makes a cols x rows image fit `bound`.

    Not clamped to 1: images smaller than the bound are scaled up to fill it.
    """
    ratio_cols = bound.cols / cols
    ratio_rows = bound.rows / rows
    return min(ratio_cols, ratio_rows)


def fit_size(cols: int, rows: int, bound: Bound) -> tuple[int, int]:
    """Output (cols, rows) after fitting; each side is at least one pixel."""
    ratio = fit_ratio(cols, rows, bound)
    return max(1, round(cols * ratio)), max(1, round(rows * ratio))


def _default_sink(cols: int, rows: int) -> None:
    log.info("Original resolution %dx%d", cols, rows)


def fit(
    raster: Image.Image,
    bound: Bound,
    sink: ResolutionSink | None = None,
    resample: Image.Resampling = Image.Resampling.BILINEAR,
) -> Image.Image:
    """
    Return `raster` scaled uniformly to fit inside `bound`.

    The source triangle (0,0), (cols-1,0), (0,rows-1) is mapped onto
    (0,0), (cols*ratio,0), (0,rows*ratio) of the output canvas. Pillow's
    AFFINE transform takes the inverse mapping (output -> input).
    """
    cols, rows = raster.size
    (sink or _default_sink)(cols, rows)

    ratio = fit_ratio(cols, rows, bound)
    out_cols, out_rows = fit_size(cols, rows, bound)

    sx = (cols - 1) / (cols * ratio)
    sy = (rows - 1) / (rows * ratio)
    return raster.transform(
        (out_cols, out_rows),
        Image.Transform.AFFINE,
        (sx, 0.0, 0.0, 0.0, sy, 0.0),
        resample=resample,
    )
