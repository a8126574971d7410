"""
Centralized exception hierarchy for BootKit.

All errors raised by BootKit derive from ``BootKitError`` so the CLI can
report them uniformly and map them to process exit codes.
"""

from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class BootKitError(Exception):
    """Base exception for all BootKit errors."""

    exit_code = 1


class ConfigurationError(BootKitError):
    """Raised when environment settings or a plan file are invalid."""

    pass


# ============================================================================
# Bootstrap Exceptions
# ============================================================================


class BootstrapError(BootKitError):
    """Base exception for failures while running the bootstrap plan."""

    pass


class StepFailedError(BootstrapError):
    """Raised when a command of a step exits with a non-zero status."""

    def __init__(
        self,
        step_name: str,
        exit_code: int,
        command: Optional[Sequence[str]] = None,
        reason: Optional[str] = None,
    ):
        self.step_name = step_name
        self.exit_code = exit_code
        self.command = tuple(command) if command is not None else None
        self.reason = reason

        msg = f"Step '{step_name}' failed with exit code {exit_code}"
        if self.command:
            msg += f"\nCommand: {' '.join(self.command)}"
        if reason:
            msg += f"\n{reason}"
        super().__init__(msg)


class RunLockTimeout(BootKitError):
    """Raised when another BootKit process holds the run lock for the project."""

    pass


# ============================================================================
# Tool Exceptions
# ============================================================================


class ToolError(BootKitError):
    """Base exception for external tool errors."""

    pass


class ToolNotFoundError(ToolError):
    """External tool not found on PATH."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool not found on PATH: {tool_name}")


class ToolVersionError(ToolError):
    """Tool version could not be determined or does not satisfy a requirement."""

    pass
