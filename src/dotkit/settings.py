from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from dotkit.common import AppDirectories, AppInfo, AppPaths
from dotkit.config.file import ConfigFileNames, ConfigStoreSettings


class Settings(BaseSettings):
    """Application-level settings, read from ``DOTKIT_*`` variables.

    These name dotkit's own directories and files, e.g.
    ``DOTKIT_PATHS__REPO_MARKER_NAME=.bootstrap``. User-facing options such as
    the link table live in the YAML config instead.
    """

    app: AppInfo = AppInfo()
    paths: AppPaths = AppPaths()

    model_config = SettingsConfigDict(
        env_prefix="DOTKIT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        nested_model_default_partial_update=True,
        extra="ignore",
    )

    def _directories(self, app_name: str) -> AppDirectories:
        return AppDirectories(app_name=app_name, repo_marker=self.paths.repo_marker_name)

    def to_app_directories(self) -> AppDirectories:
        return self._directories(self.paths.config_dir_name)

    def to_data_directories(self) -> AppDirectories:
        return self._directories(self.paths.data_dir_name)

    def to_config_store_settings(self) -> ConfigStoreSettings:
        filenames = ConfigFileNames(
            global_file=self.paths.global_config_filename,
            repo_file=self.paths.repo_config_filename,
            local_file=self.paths.local_config_filename,
        )
        return ConfigStoreSettings(directories=self.to_app_directories(), filenames=filenames)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()


__all__ = [
    "Settings",
    "get_settings",
    "settings",
]
