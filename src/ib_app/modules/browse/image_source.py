# src/ib_app/modules/browse/image_source.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from PIL import Image, ImageOps, UnidentifiedImageError

try:
    from pillow_heif import register_heif_opener

    register_heif_opener()
    _HEIF_OK = True
except Exception:
    _HEIF_OK = False

from ib_app.core.errors import DecodeFailure
from ib_app.core.logging import get_logger

__all__ = ["ImageSource", "PillowImageSource"]

log = get_logger(__name__)


@runtime_checkable
class ImageSource(Protocol):
    def decode(self, path: str) -> Image.Image | None: ...


class PillowImageSource:
    """
    Decode files with Pillow. Anything Pillow cannot identify or read is an
    ordinary failure: `decode` returns None for it instead of raising.
    """

    # What Pillow raises for "not an image" / truncated / unreadable files.
    _ORDINARY = (UnidentifiedImageError, OSError, SyntaxError, ValueError)

    def __init__(self, mode: str = "RGB", autorotate: bool = True) -> None:
        self.mode = mode
        self.autorotate = autorotate
        log.debug("Pillow image source (HEIF support: %s)", _HEIF_OK)

    def load(self, path: str) -> Image.Image:
        """Strict variant of `decode`: raises DecodeFailure instead of returning None."""
        try:
            with Image.open(path) as im:
                im.load()
                if self.autorotate:
                    im = ImageOps.exif_transpose(im)
                out = im.convert(self.mode) if im.mode != self.mode else im.copy()
        except Image.DecompressionBombError as e:
            # A valid image over Pillow's MAX_IMAGE_PIXELS limit, not junk.
            log.warning("Skipping %s: too large to decode (%s)", path, e)
            raise DecodeFailure(path, f"too large: {e}") from e
        except self._ORDINARY as e:
            raise DecodeFailure(path, f"{e.__class__.__name__}: {e}") from e
        if out.width < 1 or out.height < 1:
            raise DecodeFailure(path, "empty image")
        return out

    def decode(self, path: str) -> Image.Image | None:
        try:
            return self.load(path)
        except DecodeFailure as e:
            log.debug("Not decodable: %s", e)
            return None
