"""File-based configuration store implementation."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result, is_err

from dotkit.common import create_logger
from dotkit.constants import ENV_PREFIX

from ..merger import merge_configs
from ..models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigScope,
    ConfigValidationError,
    ConfigYamlError,
    DotkitConfig,
    GlobalConfig,
    LocalConfig,
    RepoConfig,
)
from ..protocol import ConfigStore
from ..resolver import apply_env_overrides
from .paths import ResolvedConfigPaths, discover_config_paths
from .settings import ConfigStoreSettings

logger = create_logger("config")

ScopeModel = GlobalConfig | RepoConfig | LocalConfig
ScopeModelType = type[GlobalConfig] | type[RepoConfig] | type[LocalConfig]


class FileConfigStore(ConfigStore):
    def __init__(self, settings: ConfigStoreSettings, repo_root: Path | None = None) -> None:
        self.repo_root = repo_root or Path.cwd()
        self.settings = settings

    def load(self) -> Result[DotkitConfig, ConfigError]:
        logger.debug("Loading config", repo_root=str(self.repo_root))
        paths = discover_config_paths(self.repo_root, self.settings)

        logger.debug(
            "Config paths discovered",
            global_path=str(paths.global_path) if paths.global_path else None,
            repo_path=str(paths.repo_path) if paths.repo_path else None,
            local_path=str(paths.local_path) if paths.local_path else None,
        )

        result = (
            self._load_all_scopes(paths)
            .map(lambda configs: merge_configs(*configs))
            .and_then(_with_env_overrides)
        )
        if is_err(result):
            error = result.err_value
            logger.error("Config load failed", scope=error.scope.value, error=error.message)
        return result

    def load_scope(self, scope: ConfigScope) -> Result[DotkitConfig | None, ConfigError]:
        paths = discover_config_paths(self.repo_root, self.settings)

        match scope:
            case ConfigScope.GLOBAL:
                path, model_cls = paths.global_path, GlobalConfig
            case ConfigScope.REPO:
                path, model_cls = paths.repo_path, RepoConfig
            case ConfigScope.LOCAL:
                path, model_cls = paths.local_path, LocalConfig
            case _:
                raise ValueError(f"Unexpected scope: {scope}")

        result = self._load_optional(path, model_cls, scope)
        if is_err(result):
            return result

        config = result.ok_value
        if config is None:
            return Ok(None)

        return Ok(DotkitConfig.model_validate(config.model_dump()))

    def _load_all_scopes(
        self,
        paths: ResolvedConfigPaths,
    ) -> Result[tuple[GlobalConfig | None, RepoConfig | None, LocalConfig | None], ConfigError]:
        loaded: list[ScopeModel | None] = []
        for path, model_cls, scope in (
            (paths.global_path, GlobalConfig, ConfigScope.GLOBAL),
            (paths.repo_path, RepoConfig, ConfigScope.REPO),
            (paths.local_path, LocalConfig, ConfigScope.LOCAL),
        ):
            result = self._load_optional(path, model_cls, scope)
            if is_err(result):
                return result
            loaded.append(result.ok_value)

        global_cfg, repo_cfg, local_cfg = loaded
        return Ok((global_cfg, repo_cfg, local_cfg))

    def _load_optional(
        self,
        path: Path | None,
        model_cls: ScopeModelType,
        scope: ConfigScope,
    ) -> Result[ScopeModel | None, ConfigError]:
        """Load a scoped configuration when the associated path exists."""
        if path is None:
            return Ok(None)

        return self._load_scope_config(path, model_cls, scope)

    def _load_scope_config(
        self,
        path: Path,
        model_cls: ScopeModelType,
        scope: ConfigScope,
    ) -> Result[ScopeModel, ConfigError]:
        """Read, parse and validate one scope's YAML file."""
        logger.debug("Loading config file", scope=scope.value, path=str(path))

        data_result = _read_yaml_mapping(path, scope)
        if is_err(data_result):
            error = data_result.err_value
            logger.error("Config file unreadable", scope=scope.value, path=str(path), error=error.message)
            return data_result

        try:
            model = model_cls.model_validate(data_result.ok_value)
        except ValidationError as exc:
            field, message = _first_error(exc)
            logger.error("Config validation error", scope=scope.value, path=str(path), field=field, error=message)
            return Err(ConfigValidationError(scope=scope, path=path, field=field, message=message))

        logger.debug("Config validated", scope=scope.value, path=str(path))
        return Ok(model)


def _read_yaml_mapping(path: Path, scope: ConfigScope) -> Result[dict[str, object], ConfigError]:
    if not path.is_file():
        return Err(
            ConfigNotFoundError(
                scope=scope,
                expected_path=path,
                message=f"No {scope.value} config file at this location.",
            )
        )

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        return Err(ConfigIOError(scope=scope, path=path, message=str(exc)))

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        # PyYAML marks are zero-based
        mark = getattr(exc, "problem_mark", None)
        return Err(
            ConfigYamlError(
                scope=scope,
                path=path,
                line=mark.line + 1 if mark is not None else None,
                column=mark.column + 1 if mark is not None else None,
                message=str(exc),
            )
        )

    if data is None:
        return Ok({})
    if not isinstance(data, dict):
        return Err(
            ConfigValidationError(
                scope=scope,
                path=path,
                field=None,
                message="Config file must contain a mapping such as 'links:' or 'backup:' at the top level.",
            )
        )
    return Ok(data)


def _first_error(exc: ValidationError) -> tuple[str | None, str]:
    errors = exc.errors()
    if not errors:
        return None, str(exc)

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc") or ()) or None
    return field, first.get("msg", str(exc))


def _with_env_overrides(config: DotkitConfig) -> Result[DotkitConfig, ConfigError]:
    try:
        return Ok(apply_env_overrides(config))
    except ValidationError as exc:
        field, message = _first_error(exc)
        return Err(
            ConfigValidationError(
                scope=ConfigScope.EFFECTIVE,
                field=field,
                message=f"Invalid {ENV_PREFIX}* override: {message}",
            )
        )
