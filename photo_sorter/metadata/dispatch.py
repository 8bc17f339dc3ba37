from typing import Optional

from .. import config
from .extract import ExifExtractor, JpegExtractor, HeicExtractor

# Extractors are stateless, so one instance per container serves the run
_EXTRACTORS = {}
for file_type in config.JPEG_TYPES: _EXTRACTORS[file_type] = JpegExtractor()
for file_type in config.HEIC_TYPES: _EXTRACTORS[file_type] = HeicExtractor()


def is_skipped(file_type: str) -> bool:
    return file_type.lower() in config.SKIP_TYPES


def select_extractor(file_type: str) -> Optional[ExifExtractor]:
    """Returns the extractor for a file type, or None for the misc branch."""
    return _EXTRACTORS.get(file_type.lower())
