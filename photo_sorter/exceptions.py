"""
Custom exception hierarchy for the photo sorter.

Per-file problems are raised as specific types so the driver can log them
and move on, while startup problems abort the run.
"""


class PhotoSorterError(Exception):
    """Base exception for all photo sorter errors."""
    pass


class MetadataExtractionError(PhotoSorterError):
    """Raised when EXIF cannot be extracted from a file."""
    pass


class FileOperationError(PhotoSorterError):
    """Raised when the input or output directory is unusable."""
    pass
