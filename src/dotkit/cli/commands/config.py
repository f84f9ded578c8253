from __future__ import annotations

import json
from typing import Annotated, Literal

import typer
import yaml

from dotkit.common import resolve_repo_root
from dotkit.settings import settings

from ..output import RepoOption, load_config_or_exit

FormatOption = Annotated[
    Literal["yaml", "json"],
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]

app = typer.Typer(help="Inspect dotkit configuration.")


@app.callback(invoke_without_command=True)
def _config_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show(
    format: FormatOption = "yaml",
    repo: RepoOption = None,
) -> None:
    """Print the effective configuration, link table included."""
    selected_format = format.lower()
    repo_root = resolve_repo_root(repo, settings.to_app_directories())
    config = load_config_or_exit(repo_root)

    typer.echo(_format_payload(config.model_dump(mode="json"), selected_format))


def _format_payload(payload: dict[str, object], format: str) -> str:
    if format == "json":
        return json.dumps(payload, indent=2, sort_keys=True)
    return yaml.safe_dump(payload, sort_keys=True)
