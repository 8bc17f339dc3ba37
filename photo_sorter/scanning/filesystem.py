import errno
import os
import logging
from pathlib import Path
from typing import Iterator, Optional
from datetime import datetime

from .. import config
from ..models import FileTimes


class LocalFileSystem:
    """
    Thin wrapper over the os calls the sorter needs.

    OS errors are surfaced as-is; nothing here retries.
    """

    def stat(self, path: Path) -> FileTimes:
        st = path.stat()
        return FileTimes(
            birth_time=self._birth_time(st),
            mod_time=datetime.fromtimestamp(st.st_mtime),
        )

    def created_at(self, path: Path) -> datetime:
        """Birth time where the platform records it, modification time otherwise."""
        times = self.stat(path)
        return times.birth_time or times.mod_time

    def mkdir_all(self, path: Path, mode: int = config.DIR_MODE):
        """
        Creates path and every missing parent, each with mode.
        Path.mkdir(parents=True) would give the parents the default mode.
        """
        missing = []
        current = path
        while not current.is_dir() and current.parent != current:
            missing.append(current)
            current = current.parent

        for folder in reversed(missing):
            try:
                folder.mkdir(mode=mode)
            except FileExistsError:
                if not folder.is_dir():
                    raise

    def rename(self, src: Path, dst: Path):
        # os.rename silently replaces an existing target on POSIX
        if os.path.lexists(dst):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(dst))
        os.rename(src, dst)

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def iter_regular_files(self, directory: Path) -> Iterator[os.DirEntry]:
        """
        Yields the direct children of directory that are regular files.
        Directories, symlinks and special files are skipped.
        """
        with os.scandir(directory) as it:
            entries = list(it)

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name)

        for e in entries:
            if e.is_file(follow_symlinks=False):
                yield e
            else:
                logging.debug(f"Not a regular file, skipping: {e.path}")

    @staticmethod
    def _birth_time(st: os.stat_result) -> Optional[datetime]:
        ts = getattr(st, 'st_birthtime', None)
        if ts is None:
            return None
        return datetime.fromtimestamp(ts)
