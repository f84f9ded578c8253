"""Installation flow: prerequisites, shell, dotfile links and tool managers."""

from .api import Installer
from .models import InstallReport, InstallStepError, StepName, StepOutcome, StepStatus

__all__ = [
    "InstallReport",
    "InstallStepError",
    "Installer",
    "StepName",
    "StepOutcome",
    "StepStatus",
]
