from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from ib_app.core.config import get_settings
from ib_app.modules.browse.navigator import KEY_QUIT


def make_image(path: Path, size: tuple[int, int] = (8, 6), color=(200, 40, 40), fmt: str | None = None) -> Path:
    """Write a real image file; `size` is (cols, rows)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format=fmt)
    return path


def make_junk(path: Path, text: str = "not an image") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class FakeSource:
    """Decodes only the paths in `good`, each to a `size` raster."""

    def __init__(self, good, size: tuple[int, int] = (40, 20)) -> None:
        self.good = set(good)
        self.size = size
        self.calls: list[str] = []

    def decode(self, path: str):
        self.calls.append(path)
        if path in self.good:
            return Image.new("RGB", self.size, (10, 20, 30))
        return None


class FakeDisplay:
    """Returns scripted keys; falls back to 'q' once the script runs out."""

    def __init__(self, keys=()) -> None:
        self.keys = [ord(k) if isinstance(k, str) else k for k in keys]
        self.shown: list[tuple[int, int]] = []
        self.closed = False

    def show(self, raster) -> int:
        self.shown.append(raster.size)
        if self.keys:
            return self.keys.pop(0)
        return KEY_QUIT

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("IB_ROWS", "IB_COLS", "IB_SUBDIR_POLICY", "IB_SORT_ENTRIES", "IB_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
