import json
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Tuple


def split_extension(file_name: str) -> Tuple[str, str]:
    """
    Splits a basename into (stem, ext) at the last dot.

    Unlike Path.suffix, a leading dot counts, so '.dropbox' has the
    extension '.dropbox' and an empty stem.
    """
    idx = file_name.rfind('.')
    if idx == -1:
        return file_name, ""
    return file_name[:idx], file_name[idx:]


@dataclass(frozen=True)
class ExifTag:
    """One entry of a flat EXIF tag list."""
    tag_name: str
    formatted_first: str


@dataclass(frozen=True)
class FileTimes:
    birth_time: Optional[datetime]
    mod_time: datetime


@dataclass
class FileRecord:
    """
    Represents a single file from the input directory on its way to the
    output tree.
    """
    file_name: str
    original_dir: Path
    output_root: Path
    file_type: str = field(init=False, default="")  # lowercase extension without the dot

    fs_created_at: Optional[datetime] = None

    # EXIF data
    has_exif: bool = False
    camera_maker: str = ""
    camera_model: str = ""
    time_original: Optional[datetime] = None
    time_digitized: Optional[datetime] = None
    file_date_time: Optional[datetime] = None

    # Sampled once by the date resolver when nothing better is known
    fallback_time: Optional[datetime] = field(default=None, repr=False)

    def __post_init__(self):
        _, ext = split_extension(self.file_name)
        self.file_type = ext[1:].lower()

    @property
    def source_path(self) -> Path:
        return self.original_dir / self.file_name

    @property
    def camera_name(self) -> str:
        parts = [self.camera_maker.strip(), self.camera_model.strip()]
        return " ".join(p for p in parts if p)

    def to_json(self) -> str:
        data = asdict(self)
        data.pop('fallback_time')
        return json.dumps(data, default=str)


@dataclass
class RunSummary:
    moved: int = 0
    skipped: int = 0
    failed: int = 0
    extraction_errors: int = 0
    moves: List[Tuple[Path, Path]] = field(default_factory=list)
