"""Sequential machine setup: package manager, shell, links and tool managers.

Every external tool is driven as an opaque subprocess. A failing step is
recorded as a warning and the remaining steps still run.
"""

from __future__ import annotations

import os
import platform
import stat
from collections.abc import Callable, Mapping
from pathlib import Path

from result import Err, Ok, Result, is_err

from dotkit.common import create_logger
from dotkit.config import InstallConfig
from dotkit.linker import Linker, LinkReport, LinkResult, LinkSpec, LinkStatus
from dotkit.utils.shell import CommandRunner, Which, run_command, which

from .models import InstallReport, InstallStepError, StepName, StepOutcome, StepStatus

logger = create_logger("installer")

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
MISE_INSTALL_HINT = "Install mise manually: curl https://mise.run | sh"
HOMEBREW_BIN_DIRS = {
    "Darwin": "/opt/homebrew/bin",
    "Linux": "/home/linuxbrew/.linuxbrew/bin",
}

type StepResult = Result[StepOutcome, InstallStepError]


class Installer:
    """Runs the installation steps in order and collects their outcomes."""

    def __init__(
        self,
        repo_root: Path,
        home: Path,
        *,
        linker: Linker,
        link_spec: LinkSpec,
        install_config: InstallConfig | None = None,
        runner: CommandRunner = run_command,
        lookup: Which = which,
        env: Mapping[str, str] | None = None,
        os_name: str | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._home = home
        self._linker = linker
        self._link_spec = link_spec
        self._config = install_config or InstallConfig()
        self._runner = runner
        self._lookup = lookup
        self._env = dict(env if env is not None else os.environ)
        self._os_name = os_name or platform.system()
        self._link_report: LinkReport | None = None

    @property
    def os_name(self) -> str:
        return self._os_name

    def run(
        self,
        on_step: Callable[[StepOutcome], None] | None = None,
        on_link_result: Callable[[LinkResult], None] | None = None,
    ) -> InstallReport:
        logger.info("Starting installation", os=self._os_name, repo=str(self._repo_root))

        steps: list[Callable[[], StepResult]] = [
            self._install_homebrew,
            self._install_packages,
            self._setup_shell,
            self._setup_git,
            lambda: self._run_link(on_link_result),
            self._setup_mise,
            self._setup_macos,
        ]

        outcomes: list[StepOutcome] = []
        for step in steps:
            match step():
                case Ok(outcome):
                    logger.info("Step finished", step=outcome.step.value, status=outcome.status.value)
                case Err(error):
                    logger.warning("Step failed", step=error.step.value, error=error.message)
                    outcome = error.to_outcome()
            outcomes.append(outcome)
            if on_step is not None:
                on_step(outcome)

        report = InstallReport(os_name=self._os_name, steps=outcomes, link_report=self._link_report)
        logger.success("Installation finished", warnings=report.has_warnings)
        return report

    def _is_supported_os(self) -> bool:
        return self._os_name in HOMEBREW_BIN_DIRS

    def _which(self, cmd: str) -> str | None:
        return self._lookup(cmd, path=self._env.get("PATH"))

    def _install_homebrew(self) -> StepResult:
        if not self._is_supported_os():
            return Ok(_skipped(StepName.HOMEBREW, "Homebrew installation skipped (not macOS/Linux)"))

        if self._which("brew"):
            return Ok(_ok(StepName.HOMEBREW, "Homebrew already installed"))

        logger.info("Installing Homebrew")
        script_result = self._runner(["curl", "-fsSL", HOMEBREW_INSTALL_URL], env=self._env)
        if is_err(script_result):
            return Err(
                InstallStepError(
                    step=StepName.HOMEBREW,
                    message=f"Homebrew installation failed: {script_result.err_value.message}",
                )
            )

        install_result = self._runner(["/bin/bash", "-c", script_result.ok_value], env=self._env, capture=False)
        if is_err(install_result):
            return Err(
                InstallStepError(
                    step=StepName.HOMEBREW,
                    message=f"Homebrew installation failed: {install_result.err_value.message}",
                )
            )

        # Make the fresh brew visible to the remaining steps
        bin_dir = HOMEBREW_BIN_DIRS[self._os_name]
        self._env["PATH"] = os.pathsep.join(filter(None, [bin_dir, self._env.get("PATH")]))
        return Ok(_ok(StepName.HOMEBREW, "Homebrew installed"))

    def _install_packages(self) -> StepResult:
        if not self._is_supported_os():
            return Ok(_skipped(StepName.PACKAGES, "Package installation skipped (not macOS/Linux)"))

        brewfile = self._repo_root / self._config.brewfile
        if not brewfile.is_file():
            return Ok(_skipped(StepName.PACKAGES, "No Brewfile found, skipping package installation"))

        brew = self._which("brew")
        if brew is None:
            return Err(
                InstallStepError(
                    step=StepName.PACKAGES,
                    message="Package installation had issues: brew is not on PATH",
                    hint="Install Homebrew and re-run 'dotkit install'",
                )
            )

        command = [brew, "bundle", f"--file={brewfile}"]
        if self._os_name == "Linux":
            # Casks are macOS GUI apps; brew reports them as skipped and may exit non-zero
            bundle_result = self._runner(command, env=self._env)
            if is_err(bundle_result):
                logger.warning("brew bundle reported problems", error=bundle_result.err_value.message)
            return Ok(
                StepOutcome(
                    step=StepName.PACKAGES,
                    status=StepStatus.OK,
                    message="Packages installed",
                    hints=["Cask installations are skipped on Linux"],
                )
            )

        bundle_result = self._runner(command, env=self._env, capture=False)
        if is_err(bundle_result):
            return Err(
                InstallStepError(
                    step=StepName.PACKAGES,
                    message=f"Package installation had issues: {bundle_result.err_value.message}",
                )
            )
        return Ok(_ok(StepName.PACKAGES, "Packages installed"))

    def _setup_shell(self) -> StepResult:
        zsh = self._which("zsh")
        if zsh is None:
            return Ok(_skipped(StepName.SHELL, "zsh not installed, leaving default shell unchanged"))

        if "zsh" in self._env.get("SHELL", ""):
            return Ok(_ok(StepName.SHELL, "zsh is already the default shell"))

        chsh_result = self._runner(["chsh", "-s", zsh], env=self._env)
        if is_err(chsh_result):
            return Err(
                InstallStepError(
                    step=StepName.SHELL,
                    message="Could not change shell automatically (requires password)",
                    hint="You can change it manually later with: chsh -s $(which zsh)",
                )
            )
        return Ok(_ok(StepName.SHELL, "Default shell changed to zsh"))

    def _setup_git(self) -> StepResult:
        gitconfig = self._home / ".gitconfig"
        if gitconfig.is_file():
            return Ok(_ok(StepName.GIT, "Git configuration exists"))
        return Ok(_ok(StepName.GIT, "Git config will be linked from the dotfiles repository"))

    def _run_link(self, on_link_result: Callable[[LinkResult], None] | None) -> StepResult:
        link_result = self._linker.link(self._link_spec, on_result=on_link_result)
        if is_err(link_result):
            error = link_result.err_value
            return Err(
                InstallStepError(
                    step=StepName.LINK,
                    message=f"Bootstrap failed: could not {error.operation} {error.path}: {error.message}",
                    hint="Fix the problem above and re-run 'dotkit link'",
                )
            )

        report = link_result.ok_value
        self._link_report = report
        skipped = len(report.with_status(LinkStatus.SKIPPED))
        return Ok(_ok(StepName.LINK, f"Linked {report.linked_count} entries ({skipped} skipped)"))

    def _setup_mise(self) -> StepResult:
        mise = self._which("mise")
        if mise is None:
            return Ok(
                StepOutcome(
                    step=StepName.MISE,
                    status=StepStatus.SKIPPED,
                    message="mise not found, skipping global tool installation",
                    hints=[MISE_INSTALL_HINT],
                )
            )

        self._trust_mise_config(mise)

        details: list[str] = []
        hints: list[str] = []
        for tool in self._config.mise_tools:
            use_result = self._runner([mise, "use", "-g", tool], env=self._env)
            if is_err(use_result):
                logger.warning("mise tool install failed", tool=tool, error=use_result.err_value.message)
                hints.append(f"Could not install {tool}, you can do this later with 'mise use -g {tool}'")
                continue

            binary = tool.partition("@")[0]
            location = self._runner([mise, "which", binary], env=self._env).map(str.strip).unwrap_or("")
            if location:
                details.append(f"{binary} installed and ready: {location}")
            else:
                logger.debug("mise which found nothing", tool=tool)

        return Ok(
            StepOutcome(
                step=StepName.MISE,
                status=StepStatus.OK,
                message="mise setup complete",
                details=details,
                hints=hints,
            )
        )

    def _trust_mise_config(self, mise: str) -> None:
        config_dir = self._home / ".config" / "mise"
        config_file = config_dir / "config.toml"
        if not (config_file.is_file() or config_file.is_symlink()):
            return

        trusted = [config_dir]
        actual_dir = config_file.resolve().parent
        if actual_dir != config_dir:
            # Symlinked configs are trusted at their real location too
            trusted.insert(0, actual_dir)

        for directory in trusted:
            trust_result = self._runner([mise, "trust", str(directory)], env=self._env)
            if is_err(trust_result):
                logger.warning("mise trust failed", path=str(directory), error=trust_result.err_value.message)

    def _setup_macos(self) -> StepResult:
        if self._os_name != "Darwin":
            return Ok(_skipped(StepName.MACOS, "Not running on macOS"))

        script = self._repo_root / self._config.macos_defaults
        if not script.is_file():
            return Ok(_skipped(StepName.MACOS, "No macOS defaults script found"))

        try:
            script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as exc:
            return Err(InstallStepError(step=StepName.MACOS, message=f"Cannot make {script} executable: {exc}"))

        defaults_result = self._runner([str(script)], env=self._env, capture=False)
        if is_err(defaults_result):
            return Err(
                InstallStepError(
                    step=StepName.MACOS,
                    message=f"macOS defaults script failed: {defaults_result.err_value.message}",
                )
            )
        return Ok(_ok(StepName.MACOS, "macOS settings applied"))


def _ok(step: StepName, message: str) -> StepOutcome:
    return StepOutcome(step=step, status=StepStatus.OK, message=message)


def _skipped(step: StepName, message: str) -> StepOutcome:
    return StepOutcome(step=step, status=StepStatus.SKIPPED, message=message)
