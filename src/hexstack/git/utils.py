"""Git operations used while materializing a template.

Everything goes through a CommandRunner so the build pipeline can inject
its own runner (and tests can fake git entirely).
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from hexstack.process import (
    CommandCancelledError,
    CommandError,
    CommandNotFoundError,
    CommandResult,
    CommandRunner,
    CommandTimeoutError,
    SubprocessRunner,
    format_command,
)

logger = logging.getLogger(__name__)

# Default timeout for git operations (seconds)
DEFAULT_GIT_TIMEOUT = 60


# =============================================================================
# Exceptions
# =============================================================================

class GitError(Exception):
    """Base exception for Git operations."""
    pass


class GitNotInstalledError(GitError):
    """Git is not installed or not in PATH."""
    pass


class GitTimeoutError(GitError):
    """Git command timed out."""

    def __init__(self, message: str, timeout: float):
        super().__init__(message)
        self.timeout = timeout


class GitCommandError(GitError):
    """Git command failed with non-zero exit code."""

    def __init__(self, message: str, returncode: int, stderr: str = "", command: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.command = command


# =============================================================================
# Core Functions
# =============================================================================


def run_git(
    *args,
    cwd: Optional[Path] = None,
    check: bool = False,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT,
    runner: Optional[CommandRunner] = None,
) -> CommandResult:
    """Run a git command.

    Args:
        *args: Git command arguments
        cwd: Working directory (defaults to cwd)
        check: Raise exception on failure
        timeout: Command timeout in seconds
        runner: CommandRunner to use (defaults to SubprocessRunner)

    Returns:
        CommandResult

    Raises:
        GitNotInstalledError: If git is not installed
        GitTimeoutError: If command times out
        GitCommandError: If check=True and command fails
        GitError: If git could not be started
        CommandCancelledError: If interrupted by the user
    """
    runner = runner or SubprocessRunner()
    cmd_str = format_command("git", args)

    try:
        result = runner.run("git", list(args), cwd or Path.cwd(), timeout=timeout)
    except CommandNotFoundError:
        raise GitNotInstalledError(
            "Git is not installed or not in PATH. "
            "Please install git: https://git-scm.com/downloads"
        )
    except CommandTimeoutError as e:
        raise GitTimeoutError(
            f"Git command timed out after {e.timeout}s: {cmd_str}",
            timeout=e.timeout,
        )
    except CommandCancelledError:
        raise
    except CommandError as e:
        raise GitError(str(e))

    if check and not result.success:
        raise GitCommandError(
            f"Git command failed: {cmd_str}",
            returncode=result.returncode,
            stderr=result.stderr,
            command=cmd_str,
        )
    return result


def is_git_repo(path: Optional[Path] = None, runner: Optional[CommandRunner] = None) -> bool:
    """Check if path is inside a Git repository.

    Returns False if git is not installed (does not raise).
    """
    try:
        result = run_git("rev-parse", "--git-dir", cwd=path, timeout=10, runner=runner)
        return result.success
    except GitError:
        return False


def clone_repository(
    url: str,
    destination: str,
    cwd: Path,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT,
    runner: Optional[CommandRunner] = None,
) -> None:
    """Clone url into cwd/destination.

    Raises:
        GitError: If the clone fails for any reason
    """
    logger.info("Cloning %s into %s", url, cwd / destination)
    run_git("clone", url, destination, cwd=cwd, check=True, timeout=timeout, runner=runner)


def reset_history(
    project_dir: Path,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT,
    runner: Optional[CommandRunner] = None,
) -> None:
    """Drop inherited git metadata and start a fresh repository.

    Raises:
        GitError: If git init fails
        OSError: If the old .git directory cannot be removed
    """
    git_dir = project_dir / ".git"
    if git_dir.is_dir():
        logger.debug("Removing %s", git_dir)
        shutil.rmtree(git_dir)
    elif git_dir.exists():
        # Worktrees and submodules use a .git file
        git_dir.unlink()

    run_git("init", cwd=project_dir, check=True, timeout=timeout, runner=runner)
