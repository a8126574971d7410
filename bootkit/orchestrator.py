"""
Bootstrap orchestrator.

Runs the mandatory steps of a plan in order, each inside its own working
directory, then resolves whether the optional step should run (from the
environment or an interactive prompt) and runs it under the same rules.

The first failing command aborts the whole run with ``StepFailedError``;
nothing is retried. The process working directory is restored after every
step, including when a step fails.

Example:
    >>> from bootkit.config import BootstrapConfig
    >>> orchestrator = BootstrapOrchestrator(Path('/path/to/project'))
    >>> result = orchestrator.run(BootstrapConfig.from_env())
    >>> result.steps_run
    ['api', 'rust-cli']
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from bootkit.config.settings import BootstrapConfig
from bootkit.core.exceptions import StepFailedError, ToolNotFoundError
from bootkit.core.filesystem import (
    FilesystemError,
    resolve_step_directory,
    working_directory,
)
from bootkit.core.prompt import YesNoPrompt
from bootkit.core.runner import CommandRunner
from bootkit.steps.base import BootstrapPlan, Step
from bootkit.steps.defaults import default_plan

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
EXIT_COMMAND_NOT_FOUND = 127


@dataclass
class BootstrapResult:
    """Outcome of a successful bootstrap run."""

    steps_run: List[str] = field(default_factory=list)
    optional_ran: bool = False
    dry_run: bool = False


class BootstrapOrchestrator:
    """
    Sequential executor for a bootstrap plan.

    Attributes:
        project_root: Directory step paths are relative to
        plan: Plan to execute
        runner: CommandRunner used for every command
    """

    def __init__(
        self,
        project_root: Path,
        plan: Optional[BootstrapPlan] = None,
        runner: Optional[CommandRunner] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            project_root: Project root directory
            plan: Plan to execute (default: built-in plan)
            runner: Command runner (default: a new CommandRunner). Its dry-run
                previews go to `output` unless it already has a stream.
            input_fn: Line reader for the optional-step prompt (default: input)
            output: Stream for progress text (default: stdout)
        """
        self.project_root = Path(project_root).resolve()
        self.plan = plan if plan is not None else default_plan()
        self.runner = runner if runner is not None else CommandRunner(output=output)
        if self.runner.output is None:
            self.runner.output = output
        self.input_fn = input_fn
        self.output = output

    def _say(self, message: str) -> None:
        print(message, file=self.output, flush=True)

    def run(self, config: BootstrapConfig) -> BootstrapResult:
        """
        Execute the plan.

        Args:
            config: Run settings (optional-step decision)

        Returns:
            BootstrapResult describing what ran

        Raises:
            StepFailedError: If any command fails
        """
        result = BootstrapResult(dry_run=self.runner.dry_run)

        for step in self.plan.steps:
            self.run_step(step)
            result.steps_run.append(step.name)

        if self.should_run_optional(config):
            step = self.plan.optional_step
            self.run_step(step)
            result.steps_run.append(step.name)
            result.optional_ran = True
            if self.plan.final_message:
                self._say(self.plan.final_message)

        logger.debug(f"Bootstrap finished: {result}")
        return result

    def run_step(self, step: Step) -> None:
        """
        Run every command of a step inside its working directory.

        Raises:
            StepFailedError: If the directory is missing, an executable is not
                found, or a command exits with a non-zero status
        """
        self._say(step.description)
        directory = resolve_step_directory(self.project_root, step.working_dir)
        logger.debug(f"Step '{step.name}' in {directory}")

        try:
            with working_directory(directory):
                for command in step.commands:
                    self._run_command(step, command)
        except FilesystemError as e:
            raise StepFailedError(step.name, 1, reason=str(e)) from e

        if step.success_message:
            self._say(step.success_message)

    def _run_command(self, step: Step, command) -> None:
        try:
            exit_code = self.runner.run(command)
        except ToolNotFoundError as e:
            raise StepFailedError(
                step.name, EXIT_COMMAND_NOT_FOUND, command, reason=str(e)
            ) from e

        if exit_code != 0:
            logger.debug(f"Step '{step.name}' aborted by exit code {exit_code}")
            raise StepFailedError(step.name, exit_code, command)

    def should_run_optional(self, config: BootstrapConfig) -> bool:
        """
        Decide whether the optional step runs.

        Uses the environment decision when present, otherwise asks the user.
        """
        if self.plan.optional_step is None:
            return False

        if not config.should_prompt:
            logger.debug(
                f"Optional step '{self.plan.optional_step.name}' "
                f"{'enabled' if config.install_optional else 'disabled'} by environment"
            )
            return config.install_optional

        prompt = YesNoPrompt(
            self.plan.optional_prompt, input_fn=self.input_fn, output=self.output
        )
        return prompt.ask()
