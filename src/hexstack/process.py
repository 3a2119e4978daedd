"""External command execution.

The build pipeline only talks to child processes through a CommandRunner.
SubprocessRunner is the real implementation; tests and embedding callers
can pass anything with the same ``run`` signature.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class CommandError(Exception):
    """Base exception for external command execution."""

    def __init__(self, message: str, command: str = ""):
        super().__init__(message)
        self.command = command


class CommandNotFoundError(CommandError):
    """Program is not installed or not in PATH."""
    pass


class CommandTimeoutError(CommandError):
    """Command did not finish within its timeout."""

    def __init__(self, message: str, command: str, timeout: float):
        super().__init__(message, command)
        self.timeout = timeout


class CommandCancelledError(CommandError):
    """Command was interrupted by the user; the child has been terminated."""
    pass


# =============================================================================
# Runner
# =============================================================================

@dataclass
class CommandResult:
    """Outcome of a finished command."""
    success: bool
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class CommandRunner(Protocol):
    """Anything that can run ``program args...`` in a directory."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        working_dir: Path,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        ...


def format_command(program: str, args: Sequence[str]) -> str:
    """Render a command line the way a user would type it."""
    return " ".join(shlex.quote(part) for part in [program, *args])


class SubprocessRunner:
    """Run commands with subprocess, capturing output.

    The child process is killed and reaped on every exit path, including
    timeouts and KeyboardInterrupt.
    """

    def __init__(self, default_timeout: Optional[float] = None):
        self.default_timeout = default_timeout

    def run(
        self,
        program: str,
        args: Sequence[str],
        working_dir: Path,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """Run a command and wait for it.

        Args:
            program: Executable name
            args: Arguments
            working_dir: Directory to run in
            timeout: Seconds before the child is killed (None = no limit)

        Returns:
            CommandResult (non-zero exit is not an exception)

        Raises:
            CommandNotFoundError: If the program is not installed
            CommandError: If the working directory is missing or the
                program cannot be started (e.g. not executable)
            CommandTimeoutError: If the command times out
            CommandCancelledError: If interrupted with Ctrl-C
        """
        cmd = [program, *args]
        cmd_str = format_command(program, args)
        timeout = timeout if timeout is not None else self.default_timeout

        logger.debug("Running %s (cwd=%s, timeout=%s)", cmd_str, working_dir, timeout)

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(working_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            # Popen reports a missing cwd the same way as a missing program
            if not Path(working_dir).is_dir():
                raise CommandError(
                    f"Working directory does not exist: {working_dir}",
                    command=cmd_str,
                )
            raise CommandNotFoundError(
                f"'{program}' is not installed or not in PATH",
                command=cmd_str,
            )
        except OSError as e:
            raise CommandError(f"Failed to start {cmd_str}: {e}", command=cmd_str)

        finished = False
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
            finished = True
        except subprocess.TimeoutExpired:
            raise CommandTimeoutError(
                f"Command timed out after {timeout}s: {cmd_str}",
                command=cmd_str,
                timeout=timeout,
            )
        except KeyboardInterrupt:
            raise CommandCancelledError(
                f"Command cancelled: {cmd_str}",
                command=cmd_str,
            )
        finally:
            if not finished:
                _terminate(proc)

        logger.debug("%s exited with %s", cmd_str, proc.returncode)
        return CommandResult(
            success=proc.returncode == 0,
            returncode=proc.returncode,
            stdout=stdout or "",
            stderr=stderr or "",
        )


def _terminate(proc: subprocess.Popen) -> None:
    """Kill a child process and reap it."""
    if proc.poll() is not None:
        return
    logger.debug("Killing process %s", proc.pid)
    proc.kill()
    try:
        proc.wait(timeout=5)
    except subprocess.TimeoutExpired:
        logger.warning("Process %s did not exit after kill", proc.pid)
    for stream in (proc.stdout, proc.stderr):
        if stream:
            stream.close()
