from __future__ import annotations

from dotkit.config.merger import merge_configs
from dotkit.config.models import DotkitConfig, GlobalConfig, LocalConfig, RepoConfig


def test_merge_precedence_and_deep_merge() -> None:
    global_cfg = GlobalConfig.model_validate(
        {
            "install": {"brewfile": "global/Brewfile", "mise_tools": ["node@lts", "pnpm@latest"]},
            "backup": {"prefix": ".global_"},
        }
    )
    repo_cfg = RepoConfig.model_validate(
        {
            "install": {"macos_defaults": "osx/defaults.sh", "mise_tools": ["python@3.12"]},
        }
    )
    local_cfg = LocalConfig.model_validate(
        {
            "install": {"brewfile": "local/Brewfile"},
        }
    )

    result = merge_configs(global_cfg, repo_cfg, local_cfg)

    assert result.install.brewfile == "local/Brewfile"
    assert result.install.macos_defaults == "osx/defaults.sh"
    assert result.install.mise_tools == ["python@3.12"]
    assert result.backup.prefix == ".global_"


def test_merge_none_configs_returns_defaults() -> None:
    result = merge_configs(None, None, None)

    assert isinstance(result, DotkitConfig)
    assert result == DotkitConfig()
    assert result.logging.enabled is True
    assert result.logging.log_level == "INFO"


def test_link_tables_are_replaced_not_concatenated() -> None:
    global_cfg = GlobalConfig.model_validate({"links": {"files": [".bashrc", ".zshrc"], "directories": [".vim"]}})
    repo_cfg = RepoConfig.model_validate({"links": {"files": [".gitconfig"]}})

    result = merge_configs(global_cfg, repo_cfg, None)

    assert result.links.files == [".gitconfig"]
    assert result.links.directories == [".vim"]
    assert result.links.config_dirs == [".config/mise"]


def test_unset_scope_defaults_do_not_override_broader_scope() -> None:
    global_cfg = GlobalConfig.model_validate({"links": {"config_dirs": [".config/nvim"]}})
    local_cfg = LocalConfig.model_validate({"links": {"directories": [".ssh"]}})

    result = merge_configs(global_cfg, None, local_cfg)

    assert result.links.config_dirs == [".config/nvim"]
    assert result.links.directories == [".ssh"]
