"""Per-run backup directory for destinations displaced by symlinks."""

from __future__ import annotations

import os
import shutil
from datetime import datetime
from pathlib import Path

from result import Err, Ok, Result

from dotkit.common import create_logger
from dotkit.constants import BACKUP_TIMESTAMP_FORMAT

from .models import LinkFilesystemError

logger = create_logger("backup")


class BackupDirectory:
    """Timestamp-named directory owned by a single linker run.

    Created unconditionally when the run starts, filled as existing files are
    displaced, and removed again by ``finalize`` if nothing was stored in it.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @classmethod
    def path_for(cls, home: Path, prefix: str, now: datetime) -> Path:
        return home / f"{prefix}{now.strftime(BACKUP_TIMESTAMP_FORMAT)}"

    @classmethod
    def create(cls, home: Path, prefix: str, now: datetime) -> Result[BackupDirectory, LinkFilesystemError]:
        path = cls.path_for(home, prefix, now)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return Err(LinkFilesystemError.from_os_error("create backup directory", path, exc))

        logger.debug("Backup directory created", path=str(path))
        return Ok(cls(path))

    def store(self, target: Path) -> Result[Path, LinkFilesystemError]:
        """Copy ``target`` into the backup directory under its base name.

        Directories are copied recursively with inner symlinks preserved. An
        earlier backup with the same base name is overwritten. Nodes that are
        neither files nor directories (FIFOs, sockets) are moved instead of
        copied, since reading them would block.
        """
        destination = self._path / target.name
        try:
            _clear(destination)
            if target.is_dir():
                shutil.copytree(target, destination, symlinks=True)
            elif target.is_file():
                shutil.copy2(target, destination)
            else:
                shutil.move(target, destination)
        except OSError as exc:
            return Err(LinkFilesystemError.from_os_error("back up", target, exc))

        logger.debug("Backed up destination", source=str(target), backup=str(destination))
        return Ok(destination)

    def is_empty(self) -> bool:
        if not self._path.is_dir():
            return True
        return not any(self._path.iterdir())

    def finalize(self) -> Result[bool, LinkFilesystemError]:
        """Remove the directory when nothing was backed up.

        Returns whether the directory was retained.
        """
        if not self.is_empty():
            return Ok(True)

        try:
            if self._path.exists():
                self._path.rmdir()
        except OSError as exc:
            return Err(LinkFilesystemError.from_os_error("remove empty backup directory", self._path, exc))

        logger.debug("Removed empty backup directory", path=str(self._path))
        return Ok(False)


def _clear(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif os.path.lexists(path):
        path.unlink()
