from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest
from result import is_err, is_ok

from dotkit.linker import BackupDirectory

NOW = datetime(2026, 1, 2, 3, 4, 5)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_path_for_uses_prefix_and_timestamp(tmp_path: Path) -> None:
    path = BackupDirectory.path_for(tmp_path, ".dotfiles_backup_", NOW)

    assert path == tmp_path / ".dotfiles_backup_20260102_030405"


def test_create_makes_directory_and_reuses_existing(tmp_path: Path) -> None:
    first = BackupDirectory.create(tmp_path, ".bk_", NOW)
    second = BackupDirectory.create(tmp_path, ".bk_", NOW)

    assert is_ok(first)
    assert is_ok(second)
    assert first.ok_value.path.is_dir()
    assert first.ok_value.path == second.ok_value.path


def test_create_reports_error_when_home_is_a_file(tmp_path: Path) -> None:
    home = _write(tmp_path / "home", "")

    result = BackupDirectory.create(home, ".bk_", NOW)

    assert is_err(result)
    assert result.err_value.operation == "create backup directory"


def test_store_copies_file_and_keeps_original(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    target = _write(tmp_path / "home" / ".zshrc", "original")

    stored = backup.store(target)

    assert is_ok(stored)
    assert stored.ok_value == backup.path / ".zshrc"
    assert stored.ok_value.read_text() == "original"
    assert target.read_text() == "original"


def test_store_copies_directory_preserving_inner_symlinks(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    target = tmp_path / "home" / "nvim"
    _write(target / "init.lua", "-- config")
    (target / "current").symlink_to("init.lua")

    stored = backup.store(target).unwrap()

    assert (stored / "init.lua").read_text() == "-- config"
    assert (stored / "current").is_symlink()
    assert os.readlink(stored / "current") == "init.lua"


def test_store_overwrites_previous_backup_with_same_name(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    backup.store(_write(tmp_path / "one" / "settings", "first")).unwrap()

    stored = backup.store(_write(tmp_path / "two" / "settings", "second")).unwrap()

    assert stored.read_text() == "second"


def test_store_directory_replaces_file_backup_with_same_name(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    backup.store(_write(tmp_path / "a" / "settings", "a file")).unwrap()
    directory = tmp_path / "b" / "settings"
    _write(directory / "theme.toml", "dark")

    result = backup.store(directory)

    assert is_ok(result)
    assert result.ok_value.is_dir()
    assert (result.ok_value / "theme.toml").read_text() == "dark"


def test_store_directory_replaces_directory_backup_without_stale_children(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    _write(tmp_path / "one" / "nvim" / "old.lua", "old")
    backup.store(tmp_path / "one" / "nvim").unwrap()
    _write(tmp_path / "two" / "nvim" / "init.lua", "new")

    stored = backup.store(tmp_path / "two" / "nvim").unwrap()

    assert sorted(p.name for p in stored.iterdir()) == ["init.lua"]


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires FIFO support")
def test_store_moves_special_files(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path / "home", ".bk_", NOW).unwrap()
    fifo = tmp_path / "home" / "pipe"
    os.mkfifo(fifo)

    stored = backup.store(fifo).unwrap()

    assert not os.path.lexists(fifo)
    assert os.path.lexists(stored)


def test_finalize_removes_empty_directory(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path, ".bk_", NOW).unwrap()

    result = backup.finalize()

    assert result.unwrap() is False
    assert not backup.path.exists()


def test_finalize_keeps_directory_with_backups(tmp_path: Path) -> None:
    backup = BackupDirectory.create(tmp_path, ".bk_", NOW).unwrap()
    backup.store(_write(tmp_path / ".vimrc", "set nu")).unwrap()

    result = backup.finalize()

    assert result.unwrap() is True
    assert backup.path.is_dir()
    assert not backup.is_empty()
