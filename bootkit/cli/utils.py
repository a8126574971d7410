"""
Shared utilities for CLI commands.

Provides output formatting and exit-code mapping used across commands.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from bootkit.core.exceptions import BootKitError, StepFailedError
from bootkit.core.runner import format_command
from bootkit.steps.base import BootstrapPlan

logger = logging.getLogger(__name__)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII markers if check marks can't be encoded.
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = message.replace("✓", "[OK]").replace("✗", "[FAIL]")
        print(safe_message, file=file)


def format_plan(plan: BootstrapPlan, env_var: str) -> str:
    """
    Format a plan as a human-readable listing.

    Args:
        plan: Plan to describe
        env_var: Environment variable that controls the optional step

    Returns:
        Multi-line description of every step and its commands
    """
    lines = ["Mandatory steps:"]
    for index, step in enumerate(plan.steps, start=1):
        lines.append(f"  {index}. {step.name} ({step.working_dir.as_posix()})")
        for command in step.commands:
            lines.append(f"       $ {format_command(command)}")

    if plan.optional_step is not None:
        step = plan.optional_step
        lines.append("")
        lines.append(f"Optional step (set {env_var}=1 to run without prompting):")
        lines.append(f"  {step.name} ({step.working_dir.as_posix()})")
        for command in step.commands:
            lines.append(f"       $ {format_command(command)}")

    return "\n".join(lines)


# ============================================================================
# Exit Codes
# ============================================================================


def exit_code_for(error: BootKitError) -> int:
    """
    Map an error to a process exit code.

    Step failures propagate the failing command's exit code. Commands killed
    by a signal report a negative code, which maps to 128 + signal number.
    """
    if isinstance(error, StepFailedError):
        code = error.exit_code
        if code < 0:
            return 128 + abs(code)
        return code if code != 0 else 1
    return error.exit_code


# ============================================================================
# Path Utilities
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path

    Raises:
        BootKitError: If the path is not an existing directory
    """
    if path is None:
        path = Path.cwd()
    path = Path(path).resolve()
    if not path.is_dir():
        raise BootKitError(f"Project root is not a directory: {path}")
    return path
