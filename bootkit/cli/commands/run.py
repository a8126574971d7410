"""
Run command implementation.

Executes the bootstrap plan for the project (the default action).
"""

import logging

from bootkit.cli.utils import (
    exit_code_for,
    format_plan,
    print_error,
    resolve_project_root,
)
from bootkit.config.parser import resolve_plan
from bootkit.config.settings import INSTALL_OPTIONAL_ENV, BootstrapConfig
from bootkit.core.exceptions import StepFailedError
from bootkit.core.locking import RunLock
from bootkit.core.runner import CommandRunner
from bootkit.orchestrator import BootstrapOrchestrator

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the bootstrap.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, the failing command's code otherwise)
    """
    project_root = resolve_project_root(args.project_root)
    plan = resolve_plan(project_root, args.config)

    if args.list_steps:
        print(format_plan(plan, INSTALL_OPTIONAL_ENV))
        return 0

    config = BootstrapConfig.from_env(strict=args.strict_env)
    logger.debug(f"Project root: {project_root}")
    logger.debug(f"Configuration: {config}")

    orchestrator = BootstrapOrchestrator(
        project_root, plan=plan, runner=CommandRunner(dry_run=args.dry_run)
    )

    try:
        with RunLock(project_root).acquire(timeout=args.lock_timeout):
            result = orchestrator.run(config)
    except StepFailedError as e:
        logger.debug(f"Bootstrap aborted at step '{e.step_name}'")
        details = f"Exit code: {e.exit_code}"
        if e.command:
            details += f"\n  Command: {' '.join(e.command)}"
        if e.reason:
            details += f"\n  {e.reason}"
        print_error(f"Step '{e.step_name}' failed", details)
        return exit_code_for(e)

    if result.dry_run:
        print(f"Dry run complete: {len(result.steps_run)} step(s) previewed")

    logger.debug(f"Completed steps: {', '.join(result.steps_run)}")
    return 0
