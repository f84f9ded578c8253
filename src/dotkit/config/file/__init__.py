from .paths import ResolvedConfigPaths, discover_config_paths
from .settings import ConfigFileNames, ConfigStoreSettings
from .store import FileConfigStore

__all__ = [
    "ConfigFileNames",
    "ConfigStoreSettings",
    "FileConfigStore",
    "ResolvedConfigPaths",
    "discover_config_paths",
]
