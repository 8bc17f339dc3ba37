import errno
import logging
from pathlib import Path

from ..scanning.filesystem import LocalFileSystem


class FileMover:
    def __init__(self, fs: LocalFileSystem):
        self.fs = fs

    def prepare_dir(self, folder: Path) -> bool:
        """
        Creates the destination folder. A failure is only logged: the rename
        that follows will fail too and be logged on its own.
        """
        try:
            self.fs.mkdir_all(folder)
            return True
        except OSError as e:
            logging.error(f"Failed to create {folder}: {e}")
            return False

    def move(self, src: Path, dest: Path) -> bool:
        """Renames src to dest. Never overwrites, never deletes src on failure."""
        logging.info(f"{src} -> {dest}")
        try:
            self.fs.rename(src, dest)
            return True
        except OSError as e:
            if e.errno == errno.EXDEV:
                logging.error(f"Failed to move {src} -> {dest}: source and destination are on different devices")
            else:
                logging.error(f"Failed to move {src} -> {dest}: {e}")
            return False
