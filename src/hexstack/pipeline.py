"""Project build pipeline.

Runs the ordered steps that turn a selection into a project on disk:

    validate -> resolve -> materialize -> refresh dependencies -> report

Each step starts only after the previous one succeeded. The first failure
ends the build with a PipelineError naming the step; nothing is retried,
rolled back, or cleaned up, since partial output helps diagnosis.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Type, Union

from hexstack.config import HexstackConfig
from hexstack.errors import (
    BaselineProjectError,
    DependencyRefreshError,
    HexstackError,
    PipelineError,
    TemplateTransportError,
    ToolError,
    VersionControlError,
)
from hexstack.git.utils import GitCommandError, GitError, clone_repository, reset_history
from hexstack.process import (
    CommandCancelledError,
    CommandError,
    CommandRunner,
    SubprocessRunner,
    format_command,
)
from hexstack.progress import NullProgress, ProgressSink
from hexstack.registry.components import (
    ComponentDescriptor,
    describe,
    normalize_components,
)
from hexstack.registry.templates import Frontend, ProjectTemplate, parse_frontend
from hexstack.resolver import resolve
from hexstack.validator import check_destination_free, validate_name

logger = logging.getLogger(__name__)

# Multi-directory templates keep the Rust crate here
BACKEND_DIR = "backend"


class PipelineState(Enum):
    NOT_STARTED = "not_started"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    MATERIALIZING = "materializing"
    REFRESHING_DEPENDENCIES = "refreshing_dependencies"
    COMPLETED = "completed"
    FAILED = "failed"


# Step names reported in PipelineError
STEP_VALIDATE = "validate"
STEP_RESOLVE = "resolve"
STEP_MATERIALIZE = "materialize"
STEP_REFRESH = "refresh dependencies"


# =============================================================================
# Project descriptor
# =============================================================================

class ProjectSetup:
    """What to build: name, selected components and frontend.

    Components are lowercased once here; duplicates are kept for reporting
    and collapse when matching. The template is resolved on access.
    """

    def __init__(
        self,
        name: str,
        components: Optional[Sequence[str]] = None,
        frontend: Optional[Union[str, Frontend]] = None,
        templates: Optional[Mapping[str, ProjectTemplate]] = None,
    ):
        self.name = name
        self.components: List[str] = normalize_components(components or [])
        self.frontend: Optional[Frontend] = parse_frontend(frontend)
        self._templates = templates

    @property
    def component_set(self) -> frozenset:
        return frozenset(self.components)

    @property
    def template(self) -> Optional[ProjectTemplate]:
        return resolve(self.component_set, self.frontend, self._templates)

    @property
    def recognized_components(self) -> List[ComponentDescriptor]:
        """Descriptors of known components, in selection order, without duplicates."""
        seen = set()
        descriptors = []
        for component_id in self.components:
            descriptor = describe(component_id)
            if descriptor and component_id not in seen:
                seen.add(component_id)
                descriptors.append(descriptor)
        return descriptors

    @property
    def unknown_components(self) -> List[str]:
        seen = set()
        unknown = []
        for component_id in self.components:
            if describe(component_id) is None and component_id not in seen:
                seen.add(component_id)
                unknown.append(component_id)
        return unknown

    def calculate_total_steps(self) -> int:
        return (
            1 +  # materialize (clone or baseline)
            1    # dependency refresh
        )


@dataclass
class BuildSummary:
    """Result of a successful build."""
    project_name: str
    project_path: Path
    template_name: Optional[str] = None
    frontend: Optional[str] = None
    components: List[Tuple[str, str]] = field(default_factory=list)
    unknown_components: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)


# =============================================================================
# Pipeline
# =============================================================================

class BuildPipeline:
    """Builds one project. Instances are single-use.

    Attributes:
        state: Current PipelineState
        current_step: Number of the step in progress (0 before start)
        total_steps: Fixed before the first step runs
        current_label: Label of the step in progress
        failure: PipelineError once the build failed
    """

    def __init__(
        self,
        setup: ProjectSetup,
        runner: Optional[CommandRunner] = None,
        progress: Optional[ProgressSink] = None,
        config: Optional[HexstackConfig] = None,
        parent: Optional[Path] = None,
    ):
        self.setup = setup
        self.runner = runner or SubprocessRunner()
        self.progress = progress or NullProgress()
        self.config = config or HexstackConfig()
        self.parent = parent or Path.cwd()

        self.state = PipelineState.NOT_STARTED
        self.current_step = 0
        self.total_steps = setup.calculate_total_steps()
        self.current_label = ""
        self.failure: Optional[PipelineError] = None

    @property
    def project_dir(self) -> Path:
        return self.parent / self.setup.name

    def build(self) -> BuildSummary:
        """Run every step.

        Returns:
            BuildSummary

        Raises:
            PipelineError: On the first failing step
            RuntimeError: If this pipeline already ran
        """
        if self.state != PipelineState.NOT_STARTED:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")

        logger.info(
            "Building %s (components=%s, frontend=%s)",
            self.setup.name,
            self.setup.components,
            self.setup.frontend.value if self.setup.frontend else None,
        )

        try:
            self._run_step(STEP_VALIDATE, PipelineState.VALIDATING, self._validate)
            template = self._run_step(STEP_RESOLVE, PipelineState.RESOLVING, self._resolve)

            if template:
                label = f"Cloning {template.name}..."
            else:
                label = "No specific template found, creating default project..."
            self._begin_step(label)
            self._run_step(
                STEP_MATERIALIZE,
                PipelineState.MATERIALIZING,
                lambda: self._materialize(template),
            )

            self._begin_step("Refreshing dependencies...")
            workdir = self._run_step(
                STEP_REFRESH,
                PipelineState.REFRESHING_DEPENDENCIES,
                self._refresh_dependencies,
            )
        except PipelineError as e:
            self.failure = e
            self._transition(PipelineState.FAILED)
            self.progress.finish(f"✗ Failed to {e.step}", success=False)
            raise

        summary = self._report(template, workdir)
        self._transition(PipelineState.COMPLETED)
        self.progress.finish("✓ Project setup complete!")
        return summary

    # -------------------------------------------------------------------------
    # Step plumbing
    # -------------------------------------------------------------------------

    def _transition(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s: %s -> %s", self.setup.name, self.state.value, state.value)
        self.state = state

    def _begin_step(self, label: str) -> None:
        """Advance the step counter and notify the progress sink."""
        self.current_step += 1
        self.current_label = label
        self.progress.update(self.current_step, self.total_steps, label)

    def _run_step(self, step: str, state: PipelineState, func: Callable):
        """Run one step, converting its errors into a PipelineError."""
        self._transition(state)
        try:
            return func()
        except CommandCancelledError as e:
            logger.warning("Step '%s' cancelled", step)
            raise PipelineError(step, e, cancelled=True) from e
        except (HexstackError, CommandError, OSError) as e:
            logger.debug("Step '%s' failed: %s", step, e)
            raise PipelineError(step, e) from e

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        validate_name(self.setup.name)
        check_destination_free(self.setup.name, self.parent)

    def _resolve(self) -> Optional[ProjectTemplate]:
        template = self.setup.template
        if template:
            logger.info("Resolved template %s (%s)", template.name, template.github_url)
        else:
            logger.info("No template matches %s", sorted(self.setup.component_set))
        return template

    def _materialize(self, template: Optional[ProjectTemplate]) -> None:
        if template is None:
            self._run_tool(
                "cargo", ["new", self.setup.name],
                cwd=self.parent,
                timeout=self.config.clone_timeout,
                error_cls=BaselineProjectError,
                message="`cargo new` failed",
            )
            return

        name = self.setup.name
        try:
            clone_repository(
                template.github_url,
                name,
                cwd=self.parent,
                timeout=self.config.clone_timeout,
                runner=self.runner,
            )
        except GitError as e:
            raise TemplateTransportError(
                f"Failed to clone template {template.name} from {template.github_url}",
                url=template.github_url,
                stderr=_diagnostic(e),
                suggestion=format_command("git", ["clone", template.github_url, name]),
            ) from e

        try:
            reset_history(self.project_dir, timeout=self.config.init_timeout, runner=self.runner)
        except (GitError, OSError) as e:
            raise VersionControlError(
                f"Failed to reinitialize git in {self.project_dir}",
                stderr=_diagnostic(e),
                suggestion=f"cd {name} && rm -rf .git && git init",
            ) from e

    def _refresh_dependencies(self) -> Path:
        backend = self.project_dir / BACKEND_DIR
        workdir = backend if backend.is_dir() else self.project_dir
        relative = workdir.relative_to(self.parent)

        self._run_tool(
            "cargo", ["update"],
            cwd=workdir,
            timeout=self.config.refresh_timeout,
            error_cls=DependencyRefreshError,
            message="`cargo update` failed",
            suggestion=f"cd {relative} && cargo update",
        )
        return workdir

    def _report(self, template: Optional[ProjectTemplate], workdir: Path) -> BuildSummary:
        relative = workdir.relative_to(self.parent)
        return BuildSummary(
            project_name=self.setup.name,
            project_path=self.project_dir,
            template_name=template.name if template else None,
            frontend=self.setup.frontend.value if self.setup.frontend else None,
            components=[(c.id, c.description) for c in self.setup.recognized_components],
            unknown_components=self.setup.unknown_components,
            next_steps=[f"cd {relative}", "cargo run"],
        )

    def _run_tool(
        self,
        program: str,
        args: List[str],
        cwd: Path,
        timeout: Optional[float],
        error_cls: Type[ToolError],
        message: str,
        suggestion: Optional[str] = None,
    ) -> None:
        """Run an external tool, raising error_cls if it fails."""
        suggestion = suggestion or format_command(program, args)
        try:
            result = self.runner.run(program, args, cwd, timeout=timeout)
        except CommandCancelledError:
            raise
        except CommandError as e:
            raise error_cls(message, stderr=str(e), suggestion=suggestion) from e

        if not result.success:
            raise error_cls(message, stderr=result.stderr, suggestion=suggestion)


def _diagnostic(error: Exception) -> str:
    """Best diagnostic text for an error: tool stderr if there is any."""
    if isinstance(error, GitCommandError) and error.stderr:
        return error.stderr
    return str(error)
