import logging
from datetime import datetime
from typing import Iterable, Optional

from .. import config
from ..models import ExifTag, FileRecord


def parse_exif_datetime(value: str) -> Optional[datetime]:
    """Parses "YYYY:MM:DD HH:MM:SS" as a naive wall-clock datetime."""
    try:
        return datetime.strptime(value.strip(), config.EXIF_DATE_FORMAT)
    except ValueError:
        return None


def parse_unix_seconds(value: str) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(int(value.strip()))
    except (ValueError, OverflowError, OSError):
        return None


def apply_exif_tags(record: FileRecord, tags: Iterable[ExifTag], has_exif: bool = False):
    """
    Copies the handful of tags the sorter cares about onto the record.
    Unknown tags are ignored; a repeated tag overwrites the earlier value.
    """
    tags = list(tags)
    record.has_exif = record.has_exif or has_exif

    if not tags:
        logging.info(f"EXIF data is present but empty: {record.source_path}")
        return

    record.has_exif = True
    for tag in tags:
        name = tag.tag_name.strip()
        value = tag.formatted_first

        if name == 'Make':
            record.camera_maker = value
        elif name == 'Model':
            record.camera_model = value
        elif name == 'DateTimeOriginal':
            record.time_original = parse_exif_datetime(value)
        elif name == 'DateTimeDigitized':
            record.time_digitized = parse_exif_datetime(value)
        elif name == 'FileDateTime':
            record.file_date_time = parse_unix_seconds(value)
