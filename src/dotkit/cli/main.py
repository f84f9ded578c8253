from __future__ import annotations

import os
from typing import Annotated

import typer

from dotkit.common import LoggingConfig, create_logger, setup_cli_logging
from dotkit.config import ConfigScope, FileConfigStore
from dotkit.settings import settings

from .commands import config as config_commands
from .commands.install import install
from .commands.link import link

logger = create_logger("cli")

app = typer.Typer(help="Bootstrap a machine from a dotfiles repository.")
app.add_typer(config_commands.app, name="config")
app.command("link")(link)
app.command("install")(install)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"{settings.app.project_name} {settings.app.version}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def _root_callback(
    ctx: typer.Context,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_print_version, is_eager=True, help="Show the version and exit"),
    ] = False,
) -> None:
    if no_color or os.getenv("NO_COLOR"):
        ctx.color = False

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _global_logging_config() -> LoggingConfig:
    # Broken config files are reported by the command that loads them
    store = FileConfigStore(settings=settings.to_config_store_settings())
    global_config = store.load_scope(ConfigScope.GLOBAL).unwrap_or(None)
    return global_config.logging if global_config is not None else LoggingConfig()


def main() -> None:
    """Entrypoint for the dotkit CLI."""
    logging_config = _global_logging_config()
    if logging_config.enabled:
        setup_cli_logging(settings.app, logging_config, settings.to_data_directories())
        logger.debug("CLI started", log_level=logging_config.log_level)
    app()
