from __future__ import annotations

import os

import pytest
from PIL import Image

from conftest import make_image, make_junk
from ib_app.core.errors import DecodeFailure
from ib_app.modules.browse.image_source import PillowImageSource


def test_decodes_real_image_as_rgb(tmp_path):
    path = make_image(tmp_path / "a.png", size=(12, 7))
    im = Image.new("L", (5, 5))
    im.save(tmp_path / "gray.png")

    src = PillowImageSource()

    assert src.decode(str(path)).size == (12, 7)
    assert src.decode(str(tmp_path / "gray.png")).mode == "RGB"


@pytest.mark.parametrize("name", ["notes.txt", "fake.jpg"])
def test_non_images_decode_to_none(tmp_path, name):
    path = make_junk(tmp_path / name)

    assert PillowImageSource().decode(str(path)) is None


def test_directory_and_missing_file_decode_to_none(tmp_path):
    src = PillowImageSource()

    assert src.decode(str(tmp_path)) is None
    assert src.decode(str(tmp_path / "gone.png")) is None


def test_truncated_file_is_a_decode_failure(tmp_path):
    path = tmp_path / "t.png"
    Image.frombytes("RGB", (64, 64), os.urandom(64 * 64 * 3)).save(path)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])

    with pytest.raises(DecodeFailure) as info:
        PillowImageSource().load(str(path))
    assert info.value.path == str(path)


def test_exif_orientation_is_applied(tmp_path):
    path = tmp_path / "rot.jpg"
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 CW on display
    Image.new("RGB", (20, 10), (1, 2, 3)).save(path, exif=exif)

    assert PillowImageSource().decode(str(path)).size == (10, 20)
    assert PillowImageSource(autorotate=False).decode(str(path)).size == (20, 10)


def test_oversized_image_is_skipped_with_a_warning(tmp_path, monkeypatch, caplog):
    path = make_image(tmp_path / "huge.png", size=(20, 20))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    assert PillowImageSource().decode(str(path)) is None
    assert "too large to decode" in caplog.text
    assert any(r.levelname == "WARNING" for r in caplog.records)
