"""Reusable Pydantic field annotations."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Annotated

from pydantic import AfterValidator, Field, StrictStr

type JsonDict = dict[str, object]

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]


def _normalize_relative_path(value: str) -> str:
    path = PurePosixPath(value)
    if path.is_absolute() or value.startswith("~"):
        raise ValueError(f"'{value}' must be relative to the repository root")
    if ".." in path.parts:
        raise ValueError(f"'{value}' must not point outside the repository root")
    if path == PurePosixPath("."):
        raise ValueError("path must name a file or directory inside the repository")
    return path.as_posix()


def _validate_file_prefix(value: str) -> str:
    if "/" in value or "\\" in value:
        raise ValueError("backup prefix must be a plain file name, not a path")
    return value


# Repository-relative path such as ".zshrc" or ".config/mise"
RelativeLinkPath = Annotated[
    StrictStr,
    Field(min_length=1, description="Path relative to the dotfiles repository root"),
    AfterValidator(_normalize_relative_path),
]

# Single path component used to name files or directories in the home directory
FileNamePrefix = Annotated[
    StrictStr,
    Field(min_length=1, description="Prefix for a file or directory name"),
    AfterValidator(_validate_file_prefix),
]

__all__ = [
    "FileNamePrefix",
    "JsonDict",
    "NonEmptyString",
    "RelativeLinkPath",
]
