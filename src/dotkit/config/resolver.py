"""``DOTKIT_CONFIG__*`` environment overrides, applied after file scopes are merged.

``DOTKIT_CONFIG__BACKUP__PREFIX=.old_`` sets ``backup.prefix``. Values are
parsed as YAML, so ``DOTKIT_CONFIG__LINKS__FILES='[.zshrc]'`` yields a list.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import yaml

from dotkit.common import JsonDict
from dotkit.constants import ENV_PREFIX
from dotkit.utils.dicts import deep_merge

from .models import DotkitConfig


def collect_env_overrides(environ: Mapping[str, str] | None = None) -> JsonDict:
    overrides: JsonDict = {}
    source = os.environ if environ is None else environ

    for key, raw_value in source.items():
        if not key.startswith(ENV_PREFIX):
            continue
        segments = [segment.lower() for segment in key.removeprefix(ENV_PREFIX).split("__") if segment]
        if not segments:
            continue
        _set_nested(overrides, segments, _parse_env_value(raw_value))

    return overrides


def apply_env_overrides(config: DotkitConfig, environ: Mapping[str, str] | None = None) -> DotkitConfig:
    overrides = collect_env_overrides(environ)
    if not overrides:
        return config
    return DotkitConfig.model_validate(deep_merge(config.model_dump(), overrides))


def _set_nested(data: JsonDict, segments: list[str], value: object) -> None:
    *parents, leaf = segments
    for segment in parents:
        child = data.get(segment)
        if not isinstance(child, dict):
            child = data[segment] = {}
        data = child
    data[leaf] = value


def _parse_env_value(raw: str) -> object:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
