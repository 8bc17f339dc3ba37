import json
from datetime import datetime
from pathlib import Path

import pytest

from photo_sorter.models import FileRecord, split_extension


@pytest.mark.parametrize(
    "name,expected",
    [
        ("IMG_0001.JPG", ("IMG_0001", ".JPG")),
        ("archive.tar.gz", ("archive.tar", ".gz")),
        ("README", ("README", "")),
        (".dropbox", ("", ".dropbox")),
        ("trailing.", ("trailing", ".")),
    ],
)
def test_split_extension(name, expected):
    assert split_extension(name) == expected


@pytest.mark.parametrize(
    "name,file_type",
    [
        ("IMG_0001.JPG", "jpg"),
        ("pic.HEIC", "heic"),
        ("notes.txt", "txt"),
        ("README", ""),
        (".dropbox", "dropbox"),
        ("trailing.", ""),
    ],
)
def test_file_type_is_lowercase_extension(name, file_type):
    rec = FileRecord(file_name=name, original_dir=Path("/in"), output_root=Path("/out"))
    assert rec.file_type == file_type


def test_source_path_joins_dir_and_name():
    rec = FileRecord(file_name="a.jpg", original_dir=Path("/in"), output_root=Path("/out"))
    assert rec.source_path == Path("/in/a.jpg")


@pytest.mark.parametrize(
    "maker,model,expected",
    [
        ("Canon", "EOS 5D", "Canon EOS 5D"),
        ("  Canon ", " EOS 5D  ", "Canon EOS 5D"),
        ("Canon", "", "Canon"),
        ("", "iPhone 12", "iPhone 12"),
        ("   ", "", ""),
        ("", "", ""),
    ],
)
def test_camera_name(maker, model, expected):
    rec = FileRecord(file_name="a.jpg", original_dir=Path("/in"), output_root=Path("/out"),
                     camera_maker=maker, camera_model=model)
    assert rec.camera_name == expected


def test_to_json_is_parseable():
    rec = FileRecord(file_name="a.jpg", original_dir=Path("/in"), output_root=Path("/out"),
                     time_original=datetime(2021, 6, 15, 10, 30))
    data = json.loads(rec.to_json())
    assert data["file_name"] == "a.jpg"
    assert data["file_type"] == "jpg"
    assert data["time_original"] == "2021-06-15 10:30:00"
    assert "fallback_time" not in data
