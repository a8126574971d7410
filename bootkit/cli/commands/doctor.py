"""
Doctor command for diagnosing the bootstrap environment.

Checks that every tool the plan invokes is on PATH and satisfies the
plan's version requirements, and that every step directory exists.
Nothing besides '<tool> --version' is executed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from bootkit.cli.utils import resolve_project_root, safe_print
from bootkit.config.parser import resolve_plan
from bootkit.core.exceptions import ToolError
from bootkit.core.filesystem import resolve_step_directory
from bootkit.steps.base import BootstrapPlan
from bootkit.tools.base import ToolDetector, ToolRequirement

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    fix_hint: Optional[str] = None


class EnvironmentChecker:
    """Check that a plan can run in the current environment."""

    def __init__(
        self,
        project_root: Path,
        plan: BootstrapPlan,
        detector: Optional[ToolDetector] = None,
    ):
        self.project_root = project_root
        self.plan = plan
        self.detector = detector if detector is not None else ToolDetector()

    def check_tools(self) -> List[CheckResult]:
        """Check every executable used by the plan."""
        specifiers = dict(self.plan.requirements)
        results = []

        for name in self.plan.executables():
            requirement = ToolRequirement(name, specifiers.get(name, ""))
            try:
                info = self.detector.check(requirement)
            except ToolError as e:
                hint = f"Install {name} and make sure it is on PATH"
                if requirement.specifier:
                    hint += f" ({requirement.specifier})"
                results.append(
                    CheckResult(name=name, passed=False, message=str(e), fix_hint=hint)
                )
                continue

            version = info.version if info.version is not None else "unknown version"
            results.append(
                CheckResult(name=name, passed=True, message=f"{version} ({info.path})")
            )

        return results

    def check_directories(self) -> List[CheckResult]:
        """Check that every step directory exists."""
        results = []
        for step in self.plan.all_steps():
            directory = resolve_step_directory(self.project_root, step.working_dir)
            if directory.is_dir():
                results.append(
                    CheckResult(name=step.name, passed=True, message=str(directory))
                )
            else:
                results.append(
                    CheckResult(
                        name=step.name,
                        passed=False,
                        message=f"Directory not found: {directory}",
                        fix_hint="Run from the project root or pass --project-root",
                    )
                )
        return results

    def run_all(self) -> List[CheckResult]:
        """Run all checks."""
        return self.check_tools() + self.check_directories()


def _print_result(result: CheckResult) -> None:
    marker = "✓" if result.passed else "✗"
    safe_print(f"  {marker} {result.name}: {result.message}")
    if not result.passed and result.fix_hint:
        safe_print(f"      Fix: {result.fix_hint}")


def run(args) -> int:
    """
    Run the doctor command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if all checks pass, 1 otherwise)
    """
    project_root = resolve_project_root(args.project_root)
    plan = resolve_plan(project_root, args.config)
    checker = EnvironmentChecker(project_root, plan)

    print("Tools:")
    tool_results = checker.check_tools()
    for result in tool_results:
        _print_result(result)

    print("Step directories:")
    dir_results = checker.check_directories()
    for result in dir_results:
        _print_result(result)

    failed = [r for r in tool_results + dir_results if not r.passed]
    if failed:
        logger.debug(f"{len(failed)} check(s) failed")
        print(f"\n{len(failed)} problem(s) found")
        return 1

    print("\nAll checks passed")
    return 0
