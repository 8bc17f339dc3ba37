import logging
from pathlib import Path
from datetime import datetime
from typing import Callable, Optional

from tqdm import tqdm

from . import config
from .exceptions import FileOperationError, MetadataExtractionError
from .metadata.dispatch import is_skipped, select_extractor
from .metadata.tags import apply_exif_tags
from .models import FileRecord, RunSummary
from .organization.mover import FileMover
from .organization.rules import DestinationPlanner
from .scanning.filesystem import LocalFileSystem


class PhotoSorterApp:
    def __init__(self,
                 fs: Optional[LocalFileSystem] = None,
                 now: Callable[[], datetime] = datetime.now,
                 progress: bool = True):
        self.fs = fs or LocalFileSystem()
        self.planner = DestinationPlanner(self.fs, now)
        self.mover = FileMover(self.fs)
        self.progress = progress

    def prepare_output_root(self, input_dir: Path, output_root: Path):
        """
        Startup checks. Both failures are fatal for the run.
        """
        if not input_dir.is_dir():
            raise FileOperationError(f"Input directory does not exist: {input_dir}")

        if not self.fs.exists(output_root):
            logging.info("Output directory does not exist, creating it.")
            try:
                self.fs.mkdir_all(output_root, config.DIR_MODE)
            except OSError as e:
                raise FileOperationError(f"Cannot create output directory {output_root}: {e}") from e

    def organize(self, input_dir: Path, output_root: Path) -> RunSummary:
        """
        Moves every regular file directly under input_dir into the dated
        layout under output_root.
        1. Classify (skip list)
        2. Filesystem creation time
        3. EXIF (JPEG / HEIC)
        4. Plan destination & move
        """
        self.prepare_output_root(input_dir, output_root)

        summary = RunSummary()
        entries = list(self.fs.iter_regular_files(input_dir))

        for entry in tqdm(entries, desc="Sorting", disable=not self.progress):
            record = FileRecord(file_name=entry.name, original_dir=input_dir, output_root=output_root)

            if is_skipped(record.file_type):
                logging.debug(f"Skipping {record.source_path}")
                summary.skipped += 1
                continue

            self._process(record, summary)

        logging.info(
            f"Done. Moved {summary.moved}, skipped {summary.skipped}, "
            f"failed {summary.failed}, unreadable metadata {summary.extraction_errors}."
        )
        return summary

    def _process(self, record: FileRecord, summary: RunSummary):
        src = record.source_path

        try:
            record.fs_created_at = self.fs.created_at(src)
        except OSError as e:
            logging.warning(f"Cannot stat {src}: {e}")

        extractor = select_extractor(record.file_type)
        if extractor is not None:
            try:
                tags, has_exif = extractor.extract(src)
                apply_exif_tags(record, tags, has_exif)
            except MetadataExtractionError as e:
                # Treated as a file without EXIF
                logging.warning(str(e))
                summary.extraction_errors += 1

        logging.debug(record.to_json())

        self.mover.prepare_dir(self.planner.output_dir(record))
        dest = self.planner.output_path(record)

        if self.mover.move(src, dest):
            summary.moved += 1
            summary.moves.append((src, dest))
        else:
            summary.failed += 1
