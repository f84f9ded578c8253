"""Names and locations used by the file-backed config store."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotkit.common import AppDirectories, get_global_config_root


@dataclass(frozen=True)
class ConfigFileNames:
    """File names inside the global config directory and the repo marker directory."""

    global_file: str = "config.yaml"
    repo_file: str = "config.yaml"
    local_file: str = "config.local.yaml"


@dataclass(frozen=True)
class ConfigStoreSettings:
    directories: AppDirectories
    filenames: ConfigFileNames = field(default_factory=ConfigFileNames)

    @property
    def repo_marker(self) -> str:
        return self.directories.repo_marker

    def global_config_path(self) -> Path:
        return get_global_config_root(self.directories) / self.filenames.global_file

    def repo_config_path(self, repo_root: Path) -> Path:
        return repo_root / self.repo_marker / self.filenames.repo_file

    def local_config_path(self, repo_root: Path) -> Path:
        return repo_root / self.repo_marker / self.filenames.local_file
