from pathlib import Path
from datetime import datetime
from typing import Callable

from .. import config
from ..models import FileRecord, split_extension
from ..scanning.filesystem import LocalFileSystem


def resolve_date(record: FileRecord, now: Callable[[], datetime] = datetime.now) -> datetime:
    """
    Best date for the record, in priority order:
      1. DateTimeOriginal
      2. DateTimeDigitized
      3. Filesystem creation time
      4. The current time, sampled once per record
    """
    for candidate in (record.time_original, record.time_digitized, record.fs_created_at):
        if candidate is not None:
            return candidate

    if record.fallback_time is None:
        record.fallback_time = now()
    return record.fallback_time


class DestinationPlanner:
    def __init__(self, fs: LocalFileSystem, now: Callable[[], datetime] = datetime.now):
        self.fs = fs
        self.now = now

    def output_dir(self, record: FileRecord) -> Path:
        """
        <out>/[misc/<type>/]YYYY/YYYY-MM-DD/[<camera>/]

        Files without EXIF go under misc/, grouped by type. pathlib drops the
        empty type segment, so extension-less files land directly in misc/.
        """
        folder = record.output_root

        if not record.has_exif:
            folder = folder / config.MISC_DIR / record.file_type

        dt = resolve_date(record, self.now)
        parts = {'year': dt.year, 'month': dt.month, 'day': dt.day}
        folder = folder / config.YEAR_DIR_PATTERN.format(**parts) / config.DAY_DIR_PATTERN.format(**parts)

        camera = record.camera_name
        if camera:
            folder = folder / camera

        return folder

    def output_path(self, record: FileRecord) -> Path:
        return self._resolve_collision(self.output_dir(record), record.file_name)

    def _resolve_collision(self, folder: Path, filename: str) -> Path:
        """Picks the first of name, stem-1.ext, stem-2.ext, ... not on disk."""
        stem, ext = split_extension(filename)
        candidate = folder / filename
        counter = 1

        while self.fs.exists(candidate):
            candidate = folder / config.COLLISION_PATTERN.format(stem=stem, counter=counter, ext=ext)
            counter += 1

        return candidate
