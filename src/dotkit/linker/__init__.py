"""Dotfile linker: symlink repository paths into a home directory with backup."""

from .api import Linker
from .backup import BackupDirectory
from .models import (
    DEFAULT_CONFIG_DIRS,
    DEFAULT_FILES,
    EntryKind,
    LinkEntry,
    LinkError,
    LinkFilesystemError,
    LinkReport,
    LinkResult,
    LinkSpec,
    LinkStatus,
)

__all__ = [
    "DEFAULT_CONFIG_DIRS",
    "DEFAULT_FILES",
    "BackupDirectory",
    "EntryKind",
    "LinkEntry",
    "LinkError",
    "LinkFilesystemError",
    "LinkReport",
    "LinkResult",
    "LinkSpec",
    "LinkStatus",
    "Linker",
]
