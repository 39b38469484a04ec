from __future__ import annotations

import pytest

from conftest import FakeDisplay, FakeSource
from ib_app.core.errors import BrowseError, EmptyCatalog
from ib_app.modules.browse.catalog import Catalog
from ib_app.modules.browse.navigator import (
    KEY_NEXT,
    KEY_PREV,
    KEY_QUIT,
    KEY_SPACE,
    Navigator,
    next_cursor,
)
from ib_app.modules.browse.schemas import Bound, StopReason

BOUND = Bound(rows=100, cols=100)


def _nav(paths, good=None, keys=()):
    catalog = Catalog(paths)
    display = FakeDisplay(keys)
    frames = []
    nav = Navigator(
        catalog,
        FakeSource(set(paths) if good is None else good),
        display,
        BOUND,
        on_frame=frames.append,
    )
    return nav, display, frames


@pytest.mark.parametrize(
    "cursor,key,expected",
    [
        (0, KEY_QUIT, None),
        (4, KEY_NEXT, 5),
        (4, KEY_SPACE, 5),
        (0, KEY_PREV, 0),
        (3, KEY_PREV, 2),
        (3, ord("x"), 3),
    ],
)
def test_transition_table(cursor, key, expected):
    assert next_cursor(cursor, key) == expected


def test_prev_on_first_entry_redisplays_it():
    nav, _display, frames = _nav(["a", "b"], keys="pq")

    nav.run()

    assert [f.index for f in frames] == [0, 0]


def test_prev_steps_back_one():
    nav, _display, frames = _nav(list("abcde"), keys="nnnpq")

    nav.run()

    assert [f.index for f in frames] == [0, 1, 2, 3, 2]
    assert frames[-1].path == "c"


def test_quit_stops_without_another_display():
    nav, display, frames = _nav(list("abc"), keys="nq")

    outcome = nav.run()

    assert outcome.reason == StopReason.quit
    assert len(display.shown) == 2
    assert nav.step() is False
    assert len(display.shown) == 2


def test_unbound_key_redisplays_current():
    nav, _display, frames = _nav(list("ab"), keys="x q")

    nav.run()

    assert [f.index for f in frames] == [0, 0, 1]


def test_middle_undecodable_file_is_skipped_and_removed():
    nav, display, frames = _nav(["f0", "f1", "f2"], good={"f0", "f2"}, keys="nn")

    outcome = nav.run()

    assert [f.path for f in frames] == ["f0", "f2"]
    assert nav.catalog.paths() == ["f0", "f2"]
    assert outcome.reason == StopReason.exhausted
    assert outcome.frames_shown == 2
    assert outcome.pruned == 1


def test_all_undecodable_ends_quietly():
    nav, display, frames = _nav(list("abc"), good=set())

    outcome = nav.run()

    assert outcome.reason == StopReason.exhausted
    assert outcome.frames_shown == 0
    assert display.shown == []
    assert len(nav.catalog) == 0


def test_frames_are_fitted_to_the_bound():
    nav, display, frames = _nav(["a"], keys="q")

    nav.run()

    # FakeSource rasters are 40x20
    assert display.shown == [(100, 50)]
    assert (frames[0].cols, frames[0].rows) == (40, 20)
    assert frames[0].total == 1


def test_empty_catalog_is_rejected():
    with pytest.raises(EmptyCatalog):
        Navigator(Catalog([]), FakeSource(set()), FakeDisplay(), BOUND)


def test_display_failure_is_fatal_and_names_the_path():
    class Broken(FakeDisplay):
        def show(self, raster):
            raise RuntimeError("no window")

    nav = Navigator(Catalog(["a"]), FakeSource({"a"}), Broken(), BOUND)

    with pytest.raises(BrowseError) as info:
        nav.run()
    assert info.value.path == "a"
    assert isinstance(info.value.cause, RuntimeError)


def test_unexpected_decoder_failure_is_fatal():
    class Exploding(FakeSource):
        def decode(self, path):
            raise MemoryError("decoder blew up")

    nav = Navigator(Catalog(["a", "b"]), Exploding({"a"}), FakeDisplay(), BOUND)

    with pytest.raises(BrowseError) as info:
        nav.run()
    assert info.value.path == "a"
