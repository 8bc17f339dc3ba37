import io
import logging
from pathlib import Path
from typing import Optional, Tuple, List, Any, BinaryIO

import exifread
import pillow_heif
from PIL import Image

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import ExifTag


def flatten_exif(tags: dict) -> List[ExifTag]:
    """
    Turns an exifread tag dict ("EXIF DateTimeOriginal" -> IfdTag) into a
    flat list of ExifTags, dropping the IFD prefix and thumbnail blobs.
    """
    flat = []
    for key, value in tags.items():
        if key in config.NON_TAG_KEYS:
            continue
        # "Image Make", "EXIF DateTimeOriginal", "GPS GPSLatitude", ...
        _, _, name = key.partition(' ')
        flat.append(ExifTag(tag_name=name or key, formatted_first=str(getattr(value, 'printable', value))))
    return flat


def decode_exif(fh: BinaryIO) -> List[ExifTag]:
    # details=False skips MakerNotes, which are slow and not needed here
    return flatten_exif(exifread.process_file(fh, details=False))


class ExifExtractor:
    """
    Shared contract for container-specific extractors.

    extract() returns (tags, has_exif) and raises MetadataExtractionError on
    any failure, so one bad file never stops the driver.
    """
    container = "file"

    def extract(self, path: Path) -> Tuple[List[ExifTag], bool]:
        raise NotImplementedError

    def _contradiction(self) -> MetadataExtractionError:
        # A parser must hand back either a result or an error
        return MetadataExtractionError(f"could not parse {self.container} even partially")


class JpegExtractor(ExifExtractor):
    """
    Strategy:
      - Pillow walks the JPEG markers and keeps the APPn segment list.
      - exifread dumps the EXIF tags out of the APP1 segment.

    A parseable segment list marks the file as having EXIF even when no tags
    turn up, since the file is a real JPEG rather than a misnamed blob.
    """
    container = "JPEG"

    def extract(self, path: Path) -> Tuple[List[ExifTag], bool]:
        segments, parse_error = self._parse_segments(path)

        if segments is None:
            if parse_error is None:
                raise self._contradiction()
            raise MetadataExtractionError(f"JPEG parse failed for {path}: {parse_error}") from parse_error

        has_exif = len(segments) > 0

        try:
            with path.open('rb') as f:
                tags = decode_exif(f)
        except Exception as e:
            # The earlier parse failure explains this one better
            if parse_error is not None:
                raise MetadataExtractionError(f"JPEG parse failed for {path}: {parse_error}") from parse_error
            raise MetadataExtractionError(f"EXIF dump failed for {path}: {e}") from e

        if not tags:
            logging.debug(f"No EXIF tags found for {path}")

        return tags, has_exif

    def _parse_segments(self, path: Path) -> Tuple[Optional[List[Tuple[str, bytes]]], Optional[Exception]]:
        # Only the markers are read, so the decompression bomb limit does not
        # apply; large panoramas would otherwise be rejected here.
        pixel_limit = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            with Image.open(path, formats=["JPEG"]) as img:
                return list(img.applist), None
        except Exception as e:
            return None, e
        finally:
            Image.MAX_IMAGE_PIXELS = pixel_limit


class HeicExtractor(ExifExtractor):
    """
    Strategy:
      - pillow-heif parses the ISO-BMFF boxes and exposes the raw Exif item.
      - exifread decodes the TIFF stream inside that item.
    """
    container = "HEIC"

    def extract(self, path: Path) -> Tuple[List[ExifTag], bool]:
        container, parse_error = self._parse_container(path)

        if container is None:
            if parse_error is None:
                raise self._contradiction()
            raise MetadataExtractionError(f"HEIC parse failed for {path}: {parse_error}") from parse_error

        blob = container.info.get('exif')
        if not blob:
            raise MetadataExtractionError(f"No EXIF item in {path}")

        if blob.startswith(config.EXIF_PREAMBLE):
            blob = blob[len(config.EXIF_PREAMBLE):]

        try:
            tags = decode_exif(io.BytesIO(blob))
        except Exception as e:
            raise MetadataExtractionError(f"EXIF decode failed for {path}: {e}") from e

        return tags, False

    def _parse_container(self, path: Path) -> Tuple[Optional[Any], Optional[Exception]]:
        try:
            return pillow_heif.open_heif(str(path)), None
        except Exception as e:
            return None, e
