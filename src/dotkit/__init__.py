"""dotkit - bootstrap a machine from a dotfiles repository.

By default, dotkit's internal logging is disabled when used as a library.
Library users can enable logging by calling dotkit.enable_logging().
"""

from dotkit.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]
