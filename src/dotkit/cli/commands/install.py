"""CLI command for the full machine installation flow."""

from __future__ import annotations

from pathlib import Path

import typer

from dotkit.common import resolve_repo_root
from dotkit.installer import Installer, InstallReport, StepName, StepOutcome, StepStatus
from dotkit.linker import Linker
from dotkit.settings import settings

from ..output import HomeOption, RepoOption, load_config_or_exit, print_link_result, print_link_summary

_STATUS_STYLE = {
    StepStatus.OK: ("✓", typer.colors.GREEN),
    StepStatus.SKIPPED: ("-", typer.colors.YELLOW),
    StepStatus.WARNING: ("⚠", typer.colors.RED),
}


def install(
    repo: RepoOption = None,
    home: HomeOption = None,
) -> None:
    """Set up this machine: Homebrew, packages, shell, dotfile links and mise.

    Failing steps are reported as warnings; the remaining steps still run.

    Examples:

        # Run from inside the dotfiles repository
        dotkit install
    """
    repo_root = resolve_repo_root(repo, settings.to_app_directories())
    config = load_config_or_exit(repo_root)
    home_dir = (home or Path.home()).expanduser()

    typer.secho("Dotfiles installation", fg=typer.colors.BLUE, bold=True)

    linker = Linker(repo_root, home_dir, backup_prefix=config.backup.prefix)
    installer = Installer(
        repo_root,
        home_dir,
        linker=linker,
        link_spec=config.links,
        install_config=config.install,
    )
    typer.secho(f"Detected OS: {installer.os_name}", fg=typer.colors.BLUE)

    report = installer.run(on_step=_print_step, on_link_result=print_link_result)

    if report.link_report is not None:
        print_link_summary(report.link_report)

    _print_next_steps(report, repo_root)


def _print_step(outcome: StepOutcome) -> None:
    symbol, color = _STATUS_STYLE[outcome.status]
    typer.secho(f"{symbol} [{outcome.step.value}] {outcome.message}", fg=color)
    for detail in outcome.details:
        typer.secho(f"  ✓ {detail}", fg=typer.colors.GREEN)
    for hint in outcome.hints:
        typer.secho(f"  {hint}", fg=typer.colors.CYAN)


def _print_next_steps(report: InstallReport, repo_root: Path) -> None:
    typer.secho("Installation complete!", fg=typer.colors.GREEN, bold=True)

    if report.has_warnings:
        typer.secho("⚠ Installation completed with some warnings", fg=typer.colors.YELLOW)
        typer.secho("Check the output above for details", fg=typer.colors.YELLOW)

    steps = [
        "Restart your terminal or run: source ~/.zshrc",
        f"Review and customize your dotfiles in: {repo_root}",
        "Update Git user info in ~/.gitconfig if needed",
    ]
    mise = report.outcome(StepName.MISE)
    if mise is not None and mise.status is StepStatus.OK:
        steps.append("Run 'mise doctor' to verify mise setup")

    typer.secho("Next steps:", fg=typer.colors.YELLOW)
    for number, step in enumerate(steps, start=1):
        typer.echo(f"  {number}. {step}")
