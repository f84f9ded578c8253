"""Data and error models for the dotfile linker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dotkit.common import RelativeLinkPath


class EntryKind(str, Enum):
    """Which table of the link spec an entry came from."""

    FILE = "file"
    DIRECTORY = "directory"
    CONFIG_DIR = "config_dir"


class LinkStatus(str, Enum):
    """Outcome of linking a single entry."""

    SKIPPED = "skipped"
    BACKED_UP_AND_LINKED = "backed_up_and_linked"
    SYMLINK_REPLACED = "symlink_replaced"
    LINKED = "linked"


DEFAULT_FILES = [
    ".bashrc",
    ".zshrc",
    ".bash_profile",
    ".gitconfig",
    ".gitignore_global",
]
DEFAULT_CONFIG_DIRS = [
    ".config/mise",
]


@dataclass(frozen=True, slots=True)
class LinkEntry:
    kind: EntryKind
    path: str


class LinkSpec(BaseModel):
    """Repository-relative paths to mirror into the home directory.

    Entries are processed files first, then directories, then config
    directories, each in list order. Config directories get their parent
    directory created in the home directory before linking.
    """

    model_config = ConfigDict(extra="forbid")

    files: list[RelativeLinkPath] = Field(default_factory=lambda: list(DEFAULT_FILES))
    directories: list[RelativeLinkPath] = Field(default_factory=list)
    config_dirs: list[RelativeLinkPath] = Field(default_factory=lambda: list(DEFAULT_CONFIG_DIRS))

    def entries(self) -> list[LinkEntry]:
        return [
            *(LinkEntry(EntryKind.FILE, path) for path in self.files),
            *(LinkEntry(EntryKind.DIRECTORY, path) for path in self.directories),
            *(LinkEntry(EntryKind.CONFIG_DIR, path) for path in self.config_dirs),
        ]


class LinkResult(BaseModel):
    """Per-entry outcome, used for reporting only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EntryKind
    path: str
    source: Path
    destination: Path
    status: LinkStatus
    backup_path: Path | None = None
    detail: str | None = None


class LinkReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    results: list[LinkResult]
    backup_dir: Path
    backup_retained: bool

    def with_status(self, status: LinkStatus) -> list[LinkResult]:
        return [result for result in self.results if result.status is status]

    @property
    def linked_count(self) -> int:
        return sum(1 for result in self.results if result.status is not LinkStatus.SKIPPED)


class BaseLinkError(BaseModel):
    """Base linker error model."""

    model_config = ConfigDict(extra="forbid")

    message: str


class LinkFilesystemError(BaseLinkError):
    """A filesystem operation failed; the run stops at this entry."""

    path: Path
    operation: str

    @classmethod
    def from_os_error(cls, operation: str, path: Path, exc: OSError) -> LinkFilesystemError:
        return cls(operation=operation, path=path, message=exc.strerror or str(exc))


LinkError = LinkFilesystemError


__all__ = [
    "DEFAULT_CONFIG_DIRS",
    "DEFAULT_FILES",
    "BaseLinkError",
    "EntryKind",
    "LinkEntry",
    "LinkError",
    "LinkFilesystemError",
    "LinkReport",
    "LinkResult",
    "LinkSpec",
    "LinkStatus",
]
