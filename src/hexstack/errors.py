"""Exceptions raised while resolving and building a project.

Every error here is terminal for the current build. Nothing is retried;
the caller may rerun the whole command.
"""


class HexstackError(Exception):
    """Base exception for hexstack."""
    pass


# =============================================================================
# Precondition errors (detected before any filesystem mutation)
# =============================================================================

class ProjectNameError(HexstackError):
    """Project name is malformed."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class ConflictError(HexstackError):
    """Destination path is already occupied."""

    def __init__(self, message: str, path, kind: str, suggestion: str = ""):
        super().__init__(message)
        self.path = path
        self.kind = kind  # "directory" or "file"
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.args[0]}. {self.suggestion}"
        return self.args[0]


# =============================================================================
# Tooling errors (raised by external commands)
# =============================================================================

class ToolError(HexstackError):
    """An external tool failed.

    Carries the tool's diagnostic output verbatim and the command a user
    can run by hand to retry the failed operation.
    """

    def __init__(self, message: str, stderr: str = "", suggestion: str = ""):
        super().__init__(message)
        self.stderr = stderr
        self.suggestion = suggestion

    def __str__(self) -> str:
        parts = [self.args[0] if self.args else ""]
        if self.stderr.strip():
            parts.append(self.stderr.strip())
        if self.suggestion:
            parts.append(f"To retry manually, run: {self.suggestion}")
        return "\n".join(p for p in parts if p)


class TemplateTransportError(ToolError):
    """Cloning the template repository failed."""

    def __init__(self, message: str, url: str, stderr: str = "", suggestion: str = ""):
        super().__init__(message, stderr=stderr, suggestion=suggestion)
        self.url = url


class VersionControlError(ToolError):
    """Removing inherited history or reinitializing git failed."""
    pass


class DependencyRefreshError(ToolError):
    """Updating the dependency lockfile failed."""
    pass


class BaselineProjectError(ToolError):
    """Creating the default project (no template matched) failed."""
    pass


class RegistryError(HexstackError):
    """The compiled-in template catalog violates its invariants."""
    pass


# =============================================================================
# Pipeline
# =============================================================================

class PipelineError(HexstackError):
    """A build step failed.

    Attributes:
        step: Name of the failing step ("validate", "materialize", ...)
        cause: Underlying exception
        cancelled: True when the step was interrupted by the user
    """

    def __init__(self, step: str, cause: Exception, cancelled: bool = False):
        super().__init__(f"{step} failed: {cause}")
        self.step = step
        self.cause = cause
        self.cancelled = cancelled

    @property
    def message(self) -> str:
        """Human-readable cause suitable for direct display."""
        return str(self.cause)
