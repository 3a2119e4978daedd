"""Precondition checks run before anything touches the filesystem."""

from pathlib import Path
from typing import Optional

from hexstack.errors import ConflictError, ProjectNameError

MAX_NAME_LENGTH = 50
INVALID_NAME_CHARS = ('/', '\\', ':', '*', '?', '"', '<', '>', '|')


def validate_name(name: str) -> None:
    """Check that a project name is usable as a directory name.

    Rules are checked in order and the first violation is reported.

    Raises:
        ProjectNameError: If the name is empty, too long, contains a
            path-hostile character, or does not start with a letter or
            underscore
    """
    if not name:
        raise ProjectNameError("Project name cannot be empty", name)

    if len(name) > MAX_NAME_LENGTH:
        raise ProjectNameError(
            f"Project name is too long (max {MAX_NAME_LENGTH} characters)", name
        )

    if any(c in INVALID_NAME_CHARS for c in name):
        raise ProjectNameError(
            f"Project name '{name}' contains invalid characters. "
            "Valid characters: letters, numbers, hyphens, underscores, and dots",
            name,
        )

    first = name[0]
    if not (first.isalpha() or first == "_"):
        raise ProjectNameError(
            f"Project name must start with a letter or underscore, not '{first}'", name
        )


def check_destination_free(name: str, parent: Optional[Path] = None) -> Path:
    """Check that nothing exists at parent/name.

    Returns:
        The destination path

    Raises:
        ConflictError: If a directory or file is already there
    """
    target = (parent or Path.cwd()) / name

    if target.is_dir():
        raise ConflictError(
            f"Directory '{name}' already exists",
            path=target,
            kind="directory",
            suggestion="Remove it or choose a different project name",
        )

    # Anything else (regular file, broken symlink, socket)
    if target.exists() or target.is_symlink():
        raise ConflictError(
            f"A file named '{name}' already exists",
            path=target,
            kind="file",
            suggestion="Choose a different project name",
        )

    return target
