"""Configuration storage protocol."""

from typing import Protocol

from result import Result

from .models import ConfigError, ConfigScope, DotkitConfig


class ConfigStore(Protocol):
    def load(self) -> Result[DotkitConfig, ConfigError]:
        """Merge global, repo and local files, then apply ``DOTKIT_CONFIG__*`` overrides."""
        ...

    def load_scope(self, scope: ConfigScope) -> Result[DotkitConfig | None, ConfigError]:
        """Load a single scope's file without merging.

        ``Ok(None)`` means the scope has no config file.
        """
        ...
