from __future__ import annotations

from pathlib import Path

import pytest
from result import Err, Ok
from typer.testing import CliRunner

import dotkit.cli.commands.install as install_module
from dotkit.cli.main import app
from dotkit.installer import Installer
from dotkit.utils.shell import CommandError

runner = CliRunner()


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def commands(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Swap the installer's subprocess layer for a recorder."""
    calls: list[list[str]] = []

    def fake_runner(args, *, env=None, capture=True):
        command = [str(arg) for arg in args]
        calls.append(command)
        if command[0] == "chsh":
            return Err(CommandError(message="password required", command=command, returncode=1))
        if command[1:2] == ["which"]:
            return Ok(f"/opt/mise/installs/{command[2]}/bin/{command[2]}\n")
        return Ok("")

    def fake_lookup(cmd: str, *, path: str | None = None) -> str | None:
        return {"zsh": "/bin/zsh", "mise": "/usr/local/bin/mise"}.get(cmd)

    class RecordingInstaller(Installer):
        def __init__(self, *args, **kwargs) -> None:
            kwargs.update(runner=fake_runner, lookup=fake_lookup, os_name="Linux", env={"PATH": "", "SHELL": "/bin/bash"})
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(install_module, "Installer", RecordingInstaller)
    return calls


def test_install_runs_all_steps_and_reports_warnings(tmp_path: Path, commands: list[list[str]]) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / ".zshrc", "zsh")

    result = runner.invoke(
        app,
        ["install", "--repo", str(repo), "--home", str(home)],
        env={"XDG_CONFIG_HOME": str(tmp_path / "xdg")},
    )

    assert result.exit_code == 0
    assert "Detected OS: Linux" in result.stdout
    assert "[shell] Could not change shell automatically (requires password)" in result.stdout
    assert "Created symlink:" in result.stdout
    assert "✓ Bootstrap complete!" in result.stdout
    assert "Installation completed with some warnings" in result.stdout
    assert "Run 'mise doctor' to verify mise setup" in result.stdout
    assert ["chsh", "-s", "/bin/zsh"] in commands
    assert ["/usr/local/bin/mise", "use", "-g", "node@lts"] in commands
    assert "✓ node installed and ready: /opt/mise/installs/node/bin/node" in result.stdout
    assert (home / ".zshrc").is_symlink()


def test_install_exits_zero_when_linking_fails(tmp_path: Path, commands: list[list[str]]) -> None:
    repo = tmp_path / "dotfiles"
    home = tmp_path / "home"
    home.mkdir()
    _write(repo / "missing-parent" / ".rc", "")
    _write(repo / ".dotkit" / "config.yaml", "links:\n  files: [missing-parent/.rc]\n")

    result = runner.invoke(
        app,
        ["install", "--repo", str(repo), "--home", str(home)],
        env={"XDG_CONFIG_HOME": str(tmp_path / "xdg")},
    )

    assert result.exit_code == 0
    assert "[link] Bootstrap failed: could not create symlink" in result.stdout
    assert "Bootstrap complete" not in result.stdout
    assert "Installation complete!" in result.stdout
