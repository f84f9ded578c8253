"""Common models and types used across dotkit modules."""

from .fields import FileNamePrefix, JsonDict, NonEmptyString, RelativeLinkPath
from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_cli_logging
from .models import AppDirectories, AppInfo, AppPaths
from .paths import (
    get_data_directory_from_dirs,
    get_global_config_root,
    get_repo_root,
    resolve_repo_root,
    resolve_working_directory,
)

__all__ = [
    "AppDirectories",
    "AppInfo",
    "AppPaths",
    "FileNamePrefix",
    "JsonDict",
    "LoggingConfig",
    "NonEmptyString",
    "RelativeLinkPath",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "get_data_directory_from_dirs",
    "get_global_config_root",
    "get_repo_root",
    "resolve_repo_root",
    "resolve_working_directory",
    "setup_cli_logging",
]
