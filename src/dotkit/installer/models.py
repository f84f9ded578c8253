"""Data and error models for the installation flow."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from dotkit.linker import LinkReport


class StepName(str, Enum):
    HOMEBREW = "homebrew"
    PACKAGES = "packages"
    SHELL = "shell"
    GIT = "git"
    LINK = "link"
    MISE = "mise"
    MACOS = "macos"


class StepStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    WARNING = "warning"


class StepOutcome(BaseModel):
    """What a single installation step did."""

    model_config = ConfigDict(extra="forbid")

    step: StepName
    status: StepStatus
    message: str
    # Confirmation lines, printed before hints
    details: list[str] = Field(default_factory=list)
    hints: list[str] = Field(default_factory=list)


class InstallStepError(BaseModel):
    """A step failed; later steps still run."""

    model_config = ConfigDict(extra="forbid")

    step: StepName
    message: str
    hint: str | None = None

    def to_outcome(self) -> StepOutcome:
        return StepOutcome(
            step=self.step,
            status=StepStatus.WARNING,
            message=self.message,
            hints=[self.hint] if self.hint else [],
        )


class InstallReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    os_name: str
    steps: list[StepOutcome]
    link_report: LinkReport | None = None

    @property
    def has_warnings(self) -> bool:
        return any(step.status is StepStatus.WARNING for step in self.steps)

    def outcome(self, step: StepName) -> StepOutcome | None:
        return next((outcome for outcome in self.steps if outcome.step is step), None)
