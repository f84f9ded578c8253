from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from dotkit.cli.main import app

runner = CliRunner()


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _env(base: Path) -> dict[str, str]:
    return {
        "XDG_CONFIG_HOME": str(base / "xdg"),
        "XDG_DATA_HOME": str(base / "xdg-data"),
    }


def test_link_reports_each_entry_and_backup(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    _write(repo / ".zshrc", "zsh")
    _write(repo / ".gitconfig", "[user]\n")
    _write(home / ".gitconfig", "X")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(home)], env=_env(tmp_path))

    assert result.exit_code == 0
    assert "Starting dotfiles bootstrap..." in result.stdout
    assert f"Dotfiles directory: {repo.resolve()}" in result.stdout
    assert f"Skipping {home / '.bashrc'}" in result.stdout
    assert f"Backed up existing {home / '.gitconfig'}" in result.stdout
    assert "Created symlink:" in result.stdout
    assert "✓ Bootstrap complete!" in result.stdout
    assert "Backup location:" in result.stdout
    assert (home / ".zshrc").is_symlink()


def test_link_without_backups_mentions_removed_directory(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / ".zshrc", "zsh")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(home)], env=_env(tmp_path))

    assert result.exit_code == 0
    assert "No files were backed up. Removed empty backup directory." in result.stdout
    assert not [p for p in home.iterdir() if p.name.startswith(".dotfiles_backup_")]


def test_link_uses_home_environment_by_default(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / ".bashrc", "bash")

    result = runner.invoke(app, ["link", "--repo", str(repo)], env={**_env(tmp_path), "HOME": str(home)})

    assert result.exit_code == 0
    assert (home / ".bashrc").is_symlink()


def test_link_uses_configured_link_table(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / ".vimrc", "set nu")
    _write(repo / ".zshrc", "zsh")
    _write(repo / ".dotkit" / "config.yaml", "links:\n  files: [.vimrc]\n  config_dirs: []\n")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(home)], env=_env(tmp_path))

    assert result.exit_code == 0
    assert (home / ".vimrc").is_symlink()
    assert not (home / ".zshrc").exists()


def test_link_with_only_missing_sources_exits_zero(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / ".dotkit" / "config.yaml", "links:\n  files: [.nonexistent]\n  config_dirs: []\n")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(home)], env=_env(tmp_path))

    assert result.exit_code == 0
    assert f"Skipping {home / '.nonexistent'} (source not found)" in result.stdout
    assert "No files were backed up. Removed empty backup directory." in result.stdout
    assert list(home.iterdir()) == []


def test_link_failure_exits_non_zero(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / "missing-parent" / ".rc", "")
    _write(repo / ".dotkit" / "config.yaml", "links:\n  files: [missing-parent/.rc]\n")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(home)], env=_env(tmp_path))

    assert result.exit_code == 1
    assert f"error: failed to create symlink {home / 'missing-parent' / '.rc'}" in result.stderr
    assert "Bootstrap complete" not in result.stdout


def test_link_invalid_config_exits_non_zero(tmp_path: Path) -> None:
    repo = tmp_path / "dotfiles"
    _write(repo / ".dotkit" / "config.yaml", "links:\n  files: [../escape]\n")

    result = runner.invoke(app, ["link", "--repo", str(repo), "--home", str(tmp_path / "home")], env=_env(tmp_path))

    assert result.exit_code == 1
    assert "[repo]" in result.stderr
