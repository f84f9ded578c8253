"""Public API class for linking dotfiles into a home directory."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from result import Err, Ok, Result, is_err

from dotkit.common import create_logger
from dotkit.constants import DEFAULT_BACKUP_PREFIX

from .backup import BackupDirectory
from .models import (
    EntryKind,
    LinkEntry,
    LinkError,
    LinkFilesystemError,
    LinkReport,
    LinkResult,
    LinkSpec,
    LinkStatus,
)

logger = create_logger("linker")

ResultCallback = Callable[[LinkResult], None]


class Linker:
    """Symlinks repository paths into a home directory, backing up what was there.

    The run is fail-fast: the first filesystem error stops it and is returned
    as ``Err``. Entries processed before the failure stay linked, later entries
    are left untouched, and re-running is always safe.
    """

    def __init__(
        self,
        repo_root: Path,
        home: Path,
        *,
        backup_prefix: str = DEFAULT_BACKUP_PREFIX,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repo_root = repo_root.expanduser().absolute()
        self._home = home.expanduser().absolute()
        self._backup_prefix = backup_prefix
        self._clock = clock

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    @property
    def home(self) -> Path:
        return self._home

    def link(self, spec: LinkSpec, on_result: ResultCallback | None = None) -> Result[LinkReport, LinkError]:
        logger.info("Linking dotfiles", repo=str(self._repo_root), home=str(self._home))

        backup_result = BackupDirectory.create(self._home, self._backup_prefix, self._clock())
        if is_err(backup_result):
            logger.error("Failed to create backup directory", error=backup_result.err_value.message)
            return backup_result

        backup = backup_result.ok_value
        results: list[LinkResult] = []
        run_result = self._link_entries(spec.entries(), backup, results, on_result)
        finalize_result = backup.finalize()

        if is_err(run_result):
            error = run_result.err_value
            logger.error(
                "Linking aborted",
                operation=error.operation,
                path=str(error.path),
                error=error.message,
                completed=len(results),
            )
            return run_result

        if is_err(finalize_result):
            return finalize_result

        report = LinkReport(results=results, backup_dir=backup.path, backup_retained=finalize_result.ok_value)
        logger.success(
            "Dotfiles linked",
            linked=report.linked_count,
            skipped=len(report.with_status(LinkStatus.SKIPPED)),
            backup_retained=report.backup_retained,
        )
        return Ok(report)

    def _link_entries(
        self,
        entries: list[LinkEntry],
        backup: BackupDirectory,
        results: list[LinkResult],
        on_result: ResultCallback | None,
    ) -> Result[None, LinkError]:
        for entry in entries:
            entry_result = self._link_entry(entry, backup)
            if is_err(entry_result):
                return entry_result

            link_result = entry_result.ok_value
            results.append(link_result)
            logger.info(
                "Processed entry",
                path=link_result.path,
                kind=link_result.kind.value,
                status=link_result.status.value,
            )
            if on_result is not None:
                on_result(link_result)

        return Ok(None)

    def _link_entry(self, entry: LinkEntry, backup: BackupDirectory) -> Result[LinkResult, LinkError]:
        source = self._repo_root / entry.path
        destination = self._home / entry.path

        def _result(status: LinkStatus, **extra: object) -> LinkResult:
            return LinkResult(
                kind=entry.kind,
                path=entry.path,
                source=source,
                destination=destination,
                status=status,
                **extra,
            )

        if entry.kind is EntryKind.CONFIG_DIR:
            parent_result = _ensure_parent(destination)
            if is_err(parent_result):
                return parent_result

        if not source.exists():
            return Ok(_result(LinkStatus.SKIPPED, detail="source not found"))

        if _is_covered_by_parent(source, destination):
            return Ok(_result(LinkStatus.SKIPPED, detail="covered by parent link"))

        backup_path: Path | None = None
        if destination.is_symlink():
            status = LinkStatus.SYMLINK_REPLACED
        elif destination.exists():
            store_result = backup.store(destination)
            if is_err(store_result):
                return store_result
            backup_path = store_result.ok_value
            status = LinkStatus.BACKED_UP_AND_LINKED
        else:
            status = LinkStatus.LINKED

        if status is not LinkStatus.LINKED:
            remove_result = _remove_existing(destination)
            if is_err(remove_result):
                return remove_result

        symlink_result = _create_symlink(source, destination)
        if is_err(symlink_result):
            return symlink_result

        return Ok(_result(status, backup_path=backup_path))


def _ensure_parent(destination: Path) -> Result[None, LinkFilesystemError]:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return Err(LinkFilesystemError.from_os_error("create parent directory", destination.parent, exc))
    return Ok(None)


def _is_covered_by_parent(source: Path, destination: Path) -> bool:
    # A linked ancestor makes the destination the source itself; replacing it
    # would delete the repository copy.
    if destination.is_symlink() or not destination.exists():
        return False
    try:
        return destination.resolve() == source.resolve()
    except OSError:
        return False


def _remove_existing(destination: Path) -> Result[None, LinkFilesystemError]:
    try:
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        elif os.path.lexists(destination):
            destination.unlink()
    except OSError as exc:
        return Err(LinkFilesystemError.from_os_error("remove", destination, exc))
    return Ok(None)


def _create_symlink(source: Path, destination: Path) -> Result[None, LinkFilesystemError]:
    try:
        destination.symlink_to(source, target_is_directory=source.is_dir())
    except OSError as exc:
        return Err(LinkFilesystemError.from_os_error("create symlink", destination, exc))
    return Ok(None)
