"""Configuration merging utilities."""

from __future__ import annotations

from typing import Any

from dotkit.utils.dicts import deep_merge, strip_none

from .models import (
    DotkitConfig,
    GlobalConfig,
    LocalConfig,
    RepoConfig,
)


def merge_configs(
    global_cfg: GlobalConfig | None,
    repo_cfg: RepoConfig | None,
    local_cfg: LocalConfig | None,
) -> DotkitConfig:
    """Merge configs with precedence: local > repo > global.

    Only keys actually written in a scope take part, so defaults of a more
    specific scope never mask values set in a broader one. Lists, including
    the link tables, are replaced wholesale by the more specific scope.
    """
    merged_data: dict[str, Any] = {}

    for scope in (global_cfg, repo_cfg, local_cfg):
        if scope is None:
            continue
        scope_data = strip_none(scope.model_dump(exclude_unset=True))
        merged_data = deep_merge(merged_data, scope_data)

    return DotkitConfig.model_validate(merged_data)
