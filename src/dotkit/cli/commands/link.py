"""CLI command for linking dotfiles into the home directory."""

from __future__ import annotations

from pathlib import Path

import typer
from result import Err, Ok

from dotkit.common import resolve_repo_root
from dotkit.linker import Linker
from dotkit.settings import settings

from ..output import (
    HomeOption,
    RepoOption,
    load_config_or_exit,
    print_link_error,
    print_link_result,
    print_link_summary,
    print_shell_reminder,
)


def link(
    repo: RepoOption = None,
    home: HomeOption = None,
) -> None:
    """Symlink dotfiles from the repository into the home directory.

    Existing files are moved into a timestamped backup directory first;
    existing symlinks are replaced.

    Examples:

        # Link the repository containing the current directory
        dotkit link

        # Link into a scratch home directory
        dotkit link --repo ~/dotfiles --home /tmp/home
    """
    repo_root = resolve_repo_root(repo, settings.to_app_directories())
    config = load_config_or_exit(repo_root)
    home_dir = (home or Path.home()).expanduser()

    typer.secho("Starting dotfiles bootstrap...", fg=typer.colors.BLUE)
    typer.secho(f"Dotfiles directory: {repo_root}", fg=typer.colors.BLUE)

    linker = Linker(repo_root, home_dir, backup_prefix=config.backup.prefix)

    match linker.link(config.links, on_result=print_link_result):
        case Ok(report):
            print_link_summary(report)
            print_shell_reminder()
        case Err(error):
            print_link_error(error)
            raise typer.Exit(code=1)
