"""Common models used across dotkit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

from dotkit.constants import APP_NAME


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "dev"


class AppPaths(BaseModel):
    config_dir_name: str = APP_NAME
    data_dir_name: str = APP_NAME
    repo_marker_name: str = f".{APP_NAME}"
    global_config_filename: str = "config.yaml"
    repo_config_filename: str = "config.yaml"
    local_config_filename: str = "config.local.yaml"


@dataclass(frozen=True)
class AppDirectories:
    """Application directory structure settings.

    Defines where dotkit stores files relative to standard locations:
    - ~/.config/{app_name}/
    - ~/.local/share/{app_name}/
    - <dotfiles repo>/{repo_marker}/

    Attributes:
        app_name: Name used in XDG directories (config and data)
        repo_marker: Directory name that marks the root of a dotfiles repository
    """

    app_name: str = APP_NAME
    repo_marker: str = f".{APP_NAME}"
