# src/ib_app/modules/browse/catalog.py
from __future__ import annotations

from collections.abc import Iterable, Iterator

from PIL import Image

from ib_app.core.errors import EndOfCatalog
from ib_app.core.logging import get_logger

from .image_source import ImageSource

__all__ = ["Catalog", "CatalogPruner"]

log = get_logger(__name__)


class Catalog:
    """
    Ordered list of candidate paths. Entries can only be removed, never
    reordered or re-added, so an index always names the same relative slot.
    """

    def __init__(self, paths: Iterable[str]) -> None:
        self._paths: list[str] = []
        seen: set[str] = set()
        for p in paths:
            if p in seen:
                raise ValueError(f"duplicate catalog entry: {p}")
            seen.add(p)
            self._paths.append(p)

    def __len__(self) -> int:
        return len(self._paths)

    def __getitem__(self, index: int) -> str:
        return self._paths[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __repr__(self) -> str:
        return f"Catalog({len(self._paths)} entries)"

    def remove_at(self, index: int) -> str:
        """Drop the entry at `index`; every later entry moves down one slot."""
        return self._paths.pop(index)

    def paths(self) -> list[str]:
        return list(self._paths)


class CatalogPruner:
    """Makes sure the entry under the cursor decodes, dropping the ones that don't."""

    def __init__(self, catalog: Catalog, source: ImageSource) -> None:
        self.catalog = catalog
        self.source = source
        self.removed: list[str] = []

    def ensure_valid_at(self, cursor: int) -> Image.Image:
        """
        Decode the entry at `cursor`, removing undecodable entries in place
        until one decodes. The cursor is not moved: after a removal it already
        names the entry that slid into the slot.

        Raises EndOfCatalog once no entry is left at `cursor`.
        """
        if cursor < 0:
            raise IndexError(f"cursor out of range: {cursor}")
        while cursor < len(self.catalog):
            path = self.catalog[cursor]
            raster = self.source.decode(path)
            if raster is not None:
                return raster
            self.catalog.remove_at(cursor)
            self.removed.append(path)
            log.info("Pruned %s (not an image); %d left", path, len(self.catalog))
        raise EndOfCatalog(cursor)
