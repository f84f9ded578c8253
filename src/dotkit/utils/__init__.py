from .dicts import deep_merge, strip_none
from .shell import CommandError, CommandRunner, Which, run_command, which

__all__ = [
    "CommandError",
    "CommandRunner",
    "Which",
    "deep_merge",
    "run_command",
    "strip_none",
    "which",
]
