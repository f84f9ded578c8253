from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .settings import ConfigStoreSettings


@dataclass(frozen=True, slots=True)
class ResolvedConfigPaths:
    """Config files that exist for each scope; ``None`` when a scope has no file."""

    global_path: Path | None
    repo_path: Path | None
    local_path: Path | None


def discover_config_paths(repo_root: Path, settings: ConfigStoreSettings) -> ResolvedConfigPaths:
    return ResolvedConfigPaths(
        global_path=_existing_file(settings.global_config_path()),
        repo_path=_existing_file(settings.repo_config_path(repo_root)),
        local_path=_existing_file(settings.local_config_path(repo_root)),
    )


def _existing_file(path: Path) -> Path | None:
    return path if path.is_file() else None
