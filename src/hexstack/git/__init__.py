"""Git utilities for hexstack."""

from hexstack.git.utils import (
    clone_repository,
    is_git_repo,
    reset_history,
    run_git,
    GitError,
    GitNotInstalledError,
    GitTimeoutError,
    GitCommandError,
    DEFAULT_GIT_TIMEOUT,
)

__all__ = [
    "clone_repository",
    "is_git_repo",
    "reset_history",
    "run_git",
    "GitError",
    "GitNotInstalledError",
    "GitTimeoutError",
    "GitCommandError",
    "DEFAULT_GIT_TIMEOUT",
]
