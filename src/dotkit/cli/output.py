"""Terminal rendering shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from result import is_err

from dotkit.config import ConfigError, DotkitConfig, FileConfigStore
from dotkit.linker import LinkError, LinkReport, LinkResult, LinkStatus
from dotkit.settings import settings

RepoOption = Annotated[
    Path | None,
    typer.Option(
        "--repo",
        "-r",
        help="Dotfiles repository root (defaults to the nearest directory containing .dotkit/, else cwd).",
    ),
]
HomeOption = Annotated[
    Path | None,
    typer.Option("--home", help="Home directory to link into (defaults to $HOME)."),
]


def load_config_or_exit(repo_root: Path) -> DotkitConfig:
    store = FileConfigStore(
        repo_root=repo_root,
        settings=settings.to_config_store_settings(),
    )
    result = store.load()
    if is_err(result):
        print_config_error(result.err_value)
        raise typer.Exit(code=1)
    return result.ok_value


def print_config_error(error: ConfigError) -> None:
    message = f"[{error.scope.value}] {error.message}"
    expected_path = getattr(error, "expected_path", None)
    error_path = getattr(error, "path", None)
    if expected_path is not None:
        message = f"{message} (expected at {expected_path})"
    elif error_path is not None:
        message = f"{message} ({error_path})"

    typer.secho(message, err=True, fg=typer.colors.RED)


def print_link_result(result: LinkResult) -> None:
    match result.status:
        case LinkStatus.SKIPPED:
            typer.secho(f"Skipping {result.destination} ({result.detail})", fg=typer.colors.YELLOW)
            return
        case LinkStatus.BACKED_UP_AND_LINKED:
            typer.secho(f"Backed up existing {result.destination} to {result.backup_path}", fg=typer.colors.YELLOW)
        case LinkStatus.SYMLINK_REPLACED:
            typer.secho(f"Removed existing symlink {result.destination}", fg=typer.colors.YELLOW)
        case LinkStatus.LINKED:
            pass

    typer.secho(f"Created symlink: {result.destination} -> {result.source}", fg=typer.colors.GREEN)


def print_link_summary(report: LinkReport) -> None:
    typer.secho("✓ Bootstrap complete!", fg=typer.colors.GREEN)
    if report.backup_retained:
        typer.secho(f"Backup location: {report.backup_dir}", fg=typer.colors.BLUE)
    else:
        typer.secho("No files were backed up. Removed empty backup directory.", fg=typer.colors.YELLOW)


def print_link_error(error: LinkError) -> None:
    typer.secho(f"error: failed to {error.operation} {error.path}", err=True, fg=typer.colors.RED)
    typer.secho(f"  {error.message}", err=True)
    typer.secho(
        "hint: entries before this one are linked; fix the problem and re-run 'dotkit link'",
        err=True,
        fg=typer.colors.CYAN,
    )


def print_shell_reminder() -> None:
    typer.secho(
        "Remember to restart your shell or run 'source ~/.zshrc' (or ~/.bashrc)",
        fg=typer.colors.YELLOW,
    )
