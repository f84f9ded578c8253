"""Subprocess helpers for the external tools the installer drives."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from typing import Protocol

from pydantic import BaseModel
from result import Err, Ok, Result


class CommandError(BaseModel):
    """An external command failed or could not be started."""

    message: str
    command: list[str]
    returncode: int | None = None


class CommandRunner(Protocol):
    def __call__(
        self,
        args: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> Result[str, CommandError]: ...


class Which(Protocol):
    def __call__(self, cmd: str, *, path: str | None = None) -> str | None: ...


def run_command(
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    capture: bool = True,
) -> Result[str, CommandError]:
    """Run a command to completion.

    With ``capture`` the captured stdout is returned; without it the command
    inherits the terminal so interactive tools (installers, password prompts)
    keep working, and the returned output is empty.
    """
    command = [str(arg) for arg in args]
    try:
        completed = subprocess.run(
            command,
            env=dict(env) if env is not None else None,
            capture_output=capture,
            text=True,
            check=True,
        )
    except FileNotFoundError:
        return Err(CommandError(message=f"Command not found: {command[0]}", command=command))
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() if capture else ""
        message = detail or f"Command exited with status {exc.returncode}"
        return Err(CommandError(message=message, command=command, returncode=exc.returncode))
    except OSError as exc:
        return Err(CommandError(message=str(exc), command=command))

    return Ok(completed.stdout if capture else "")


def which(cmd: str, *, path: str | None = None) -> str | None:
    return shutil.which(cmd, path=path)

