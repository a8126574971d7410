"""
Core functionality for BootKit.

This package contains the foundational modules the orchestrator depends on.
"""

from .exceptions import (
    BootKitError,
    ConfigurationError,
    BootstrapError,
    StepFailedError,
    RunLockTimeout,
    ToolError,
    ToolNotFoundError,
    ToolVersionError,
)

from .filesystem import (
    FilesystemError,
    resolve_step_directory,
    working_directory,
)

from .locking import RunLock, get_global_cache_dir

from .prompt import PromptState, YesNoPrompt

from .runner import CommandRunner, format_command

__all__ = [
    # Exceptions
    "BootKitError",
    "ConfigurationError",
    "BootstrapError",
    "StepFailedError",
    "RunLockTimeout",
    "ToolError",
    "ToolNotFoundError",
    "ToolVersionError",
    # Filesystem
    "FilesystemError",
    "resolve_step_directory",
    "working_directory",
    # Locking
    "RunLock",
    "get_global_cache_dir",
    # Prompt
    "PromptState",
    "YesNoPrompt",
    # Runner
    "CommandRunner",
    "format_command",
]
