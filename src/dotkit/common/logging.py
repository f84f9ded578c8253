"""Loguru setup for dotkit.

The CLI writes to a rotating file under the XDG data directory, so terminal
output stays reserved for user-facing status lines. Imported as a library,
dotkit is silent until ``dotkit.enable_logging()`` is called.
"""

import sys
from pathlib import Path
from typing import Any, Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from dotkit.constants import APP_NAME

from .models import AppDirectories, AppInfo
from .paths import get_data_directory_from_dirs

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]: <9} | {message} | {extra}\n{exception}"


class LoggingConfig(BaseModel):
    """The ``logging`` section of the global config file."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    log_level: LogLevel = "INFO"
    # Relative paths are placed under the data directory
    log_file: str | None = None
    rotation: str = Field(default="1 MB")
    retention: str = Field(default="7 days")
    format: Literal["json", "text"] = "text"


def resolve_log_file(config: LoggingConfig, directories: AppDirectories) -> Path:
    logs_dir = get_data_directory_from_dirs(directories) / "logs"
    if not config.log_file:
        return logs_dir / f"{APP_NAME}.log"

    path = Path(config.log_file).expanduser()
    return path if path.is_absolute() else logs_dir / path


def setup_cli_logging(app_info: AppInfo, config: LoggingConfig, directories: AppDirectories) -> int:
    """Route dotkit logs to the CLI log file and return the handler id."""
    log_file = resolve_log_file(config, directories)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "cli", "env": app_info.environment})

    handler_id = logger.add(log_file, **_file_sink_options(app_info, config))
    logger.debug("Log file ready", log_file=str(log_file), level=config.log_level, format=config.format)
    return handler_id


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: LogLevel = "INFO") -> int:
    """Send dotkit logs to stderr for library users."""
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "lib"})
    return logger.add(sys.stderr, level=level, format=TEXT_FORMAT, colorize=False)


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)


def _file_sink_options(app_info: AppInfo, config: LoggingConfig) -> dict[str, Any]:
    options: dict[str, Any] = {
        "level": config.log_level,
        "rotation": config.rotation,
        "retention": config.retention,
        "diagnose": app_info.environment == "dev",
    }
    if config.format == "json":
        options["serialize"] = True
    else:
        options["format"] = TEXT_FORMAT
    return options
