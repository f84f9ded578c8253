"""Public configuration API for dotkit."""

from __future__ import annotations

from .file import ConfigFileNames, ConfigStoreSettings, FileConfigStore
from .models import (
    BackupConfig,
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigScope,
    ConfigValidationError,
    ConfigYamlError,
    DotkitConfig,
    InstallConfig,
)
from .protocol import ConfigStore

__all__ = [
    "BackupConfig",
    "ConfigError",
    "ConfigFileNames",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigScope",
    "ConfigStore",
    "ConfigStoreSettings",
    "ConfigValidationError",
    "ConfigYamlError",
    "DotkitConfig",
    "FileConfigStore",
    "InstallConfig",
]
