import os
from datetime import datetime
from pathlib import Path

import piexif
import pytest
from PIL import Image

from photo_sorter.scanning.filesystem import LocalFileSystem

FIXED_NOW = datetime(2030, 7, 8, 9, 10, 11)


def exif_bytes(make=None, model=None, original=None, digitized=None) -> bytes:
    """Builds an APP1 payload (with the Exif preamble) using piexif."""
    zeroth = {}
    exif = {}
    if make is not None:
        zeroth[piexif.ImageIFD.Make] = make
    if model is not None:
        zeroth[piexif.ImageIFD.Model] = model
    if original is not None:
        exif[piexif.ExifIFD.DateTimeOriginal] = original
    if digitized is not None:
        exif[piexif.ExifIFD.DateTimeDigitized] = digitized
    return piexif.dump({"0th": zeroth, "Exif": exif, "GPS": {}, "1st": {}, "thumbnail": None})


def set_mtime(path: Path, dt: datetime):
    ts = dt.timestamp()
    os.utime(path, (ts, ts))


@pytest.fixture
def make_jpeg():
    """Returns a factory writing a tiny JPEG, optionally with EXIF."""
    def _make(path: Path, **exif_fields) -> Path:
        img = Image.new("RGB", (8, 8), color=(200, 40, 40))
        if exif_fields:
            img.save(path, "JPEG", exif=exif_bytes(**exif_fields))
        else:
            img.save(path, "JPEG")
        return path
    return _make


@pytest.fixture
def no_birth_time(monkeypatch):
    """Pretends the platform does not record birth times."""
    monkeypatch.setattr(LocalFileSystem, "_birth_time", staticmethod(lambda st: None))


@pytest.fixture
def dirs(tmp_path):
    src = tmp_path / "in"
    out = tmp_path / "out"
    src.mkdir()
    return src, out
