"""Where dotkit finds its own config and data, and which dotfiles repository to use."""

from __future__ import annotations

import os
from pathlib import Path

from .models import AppDirectories


def _xdg_dir(env_var: str, *fallback: str) -> Path:
    value = os.getenv(env_var)
    return Path(value).expanduser() if value else Path.home().joinpath(*fallback)


def get_global_config_root(directories: AppDirectories) -> Path:
    """``$XDG_CONFIG_HOME/<app>``, defaulting to ``~/.config/<app>``."""
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / directories.app_name


def get_data_directory_from_dirs(directories: AppDirectories) -> Path:
    """``$XDG_DATA_HOME/<app>``, defaulting to ``~/.local/share/<app>``."""
    return _xdg_dir("XDG_DATA_HOME", ".local", "share") / directories.app_name


def resolve_working_directory(working_dir: Path | None) -> Path:
    base = Path.cwd() if working_dir is None else working_dir
    if base.is_file():
        base = base.parent
    return base.resolve()


def get_repo_root(start_dir: Path | None, directories: AppDirectories) -> Path | None:
    """Return the nearest directory at or above ``start_dir`` holding the repo marker directory."""
    current = Path.cwd() if start_dir is None else start_dir
    if current.is_file():
        current = current.parent

    for candidate in (current, *current.parents):
        if (candidate / directories.repo_marker).is_dir():
            return candidate
    return None


def resolve_repo_root(repo_root: Path | None, directories: AppDirectories) -> Path:
    """Pick the dotfiles repository to operate on.

    An explicit path wins. Otherwise the nearest ancestor of the current
    directory carrying the repo marker is used, falling back to the current
    directory itself.
    """
    if repo_root is not None:
        return resolve_working_directory(repo_root.expanduser())

    cwd = resolve_working_directory(None)
    return get_repo_root(cwd, directories) or cwd
