"""Pydantic models for dotkit configuration scopes and errors."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dotkit.common import FileNamePrefix, LoggingConfig, NonEmptyString, RelativeLinkPath
from dotkit.constants import DEFAULT_BACKUP_PREFIX
from dotkit.linker import LinkSpec


class ConfigScope(str, Enum):
    GLOBAL = "global"
    REPO = "repo"
    LOCAL = "local"
    # Merged view, used for errors raised after merging (env overrides)
    EFFECTIVE = "effective"


class _ScopedError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    message: str


class ConfigNotFoundError(_ScopedError):
    """No config file where one was required."""

    expected_path: Path


class ConfigYamlError(_ScopedError):
    """The file is not parseable YAML. ``line`` and ``column`` are 1-based."""

    path: Path
    line: int | None = None
    column: int | None = None


class ConfigValidationError(_ScopedError):
    """The document parsed but does not fit the schema.

    ``path`` is ``None`` when the offending values did not come from a file.
    """

    path: Path | None = None
    field: str | None = None


class ConfigIOError(_ScopedError):
    path: Path


type ConfigError = ConfigNotFoundError | ConfigYamlError | ConfigValidationError | ConfigIOError


class BackupConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prefix: FileNamePrefix = DEFAULT_BACKUP_PREFIX


class InstallConfig(BaseModel):
    """Locations of opaque installer inputs inside the dotfiles repository."""

    model_config = ConfigDict(extra="forbid")

    brewfile: RelativeLinkPath = "homebrew/Brewfile"
    macos_defaults: RelativeLinkPath = "macos/defaults.sh"
    mise_tools: list[NonEmptyString] = Field(default_factory=lambda: ["node@lts", "pnpm@latest"])


class _BootstrapSections(BaseModel):
    model_config = ConfigDict(extra="allow")

    links: LinkSpec = Field(default_factory=LinkSpec)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)


class GlobalConfig(_BootstrapSections):
    """``~/.config/dotkit/config.yaml``. The only scope allowed to configure logging."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class RepoConfig(_BootstrapSections):
    """``<repo>/.dotkit/config.yaml``, committed with the dotfiles."""

    scope_label: ClassVar[str] = "repo"
    config_file: ClassVar[str] = ".dotkit/config.yaml"

    @model_validator(mode="before")
    @classmethod
    def _reject_logging(cls, data: Any) -> Any:
        if isinstance(data, dict) and "logging" in data:
            raise ValueError(
                "Logging configuration can only be set in global config (~/.config/dotkit/config.yaml). "
                f"Remove 'logging' from {cls.scope_label} config ({cls.config_file})."
            )
        return data


class LocalConfig(RepoConfig):
    """``<repo>/.dotkit/config.local.yaml``, per-machine and not committed."""

    scope_label: ClassVar[str] = "local"
    config_file: ClassVar[str] = ".dotkit/config.local.yaml"


class DotkitConfig(_BootstrapSections):
    """Effective configuration after merging every scope."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
