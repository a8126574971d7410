"""
External command execution for BootKit.

Commands run in the current working directory with stdout and stderr passed
straight through to the user. Executables are resolved with ``shutil.which``
so Windows shims such as ``yarn.cmd`` work without going through a shell.
"""

import logging
import shlex
import shutil
import subprocess
import sys
from typing import List, Mapping, Optional, Sequence, TextIO

from bootkit.core.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    """Render an argv sequence for display."""
    if sys.platform == "win32":
        return subprocess.list2cmdline(list(command))
    return shlex.join(command)


class CommandRunner:
    """
    Run external commands for bootstrap steps.

    Attributes:
        dry_run: If True, commands are printed instead of executed
        env: Optional environment for child processes (default: inherit)
        history: Commands executed (or previewed) so far, in order
        output: Stream for dry-run previews (default: sys.stdout)
    """

    def __init__(
        self,
        dry_run: bool = False,
        env: Optional[Mapping[str, str]] = None,
        output: Optional[TextIO] = None,
    ):
        self.dry_run = dry_run
        self.env = dict(env) if env is not None else None
        self.output = output
        self.history: List[tuple] = []

    def resolve(self, executable: str) -> str:
        """
        Resolve an executable name to a full path.

        Raises:
            ToolNotFoundError: If the executable is not on PATH
        """
        resolved = shutil.which(executable)
        if resolved is None:
            raise ToolNotFoundError(executable)
        return resolved

    def run(self, command: Sequence[str]) -> int:
        """
        Run a single command in the current working directory.

        Args:
            command: Argument vector, first element is the executable

        Returns:
            Process exit code (0 in dry-run mode)

        Raises:
            ToolNotFoundError: If the executable cannot be found
        """
        if not command:
            raise ValueError("Command cannot be empty")

        self.history.append(tuple(command))

        if self.dry_run:
            print(
                f"  [dry-run] {format_command(command)}",
                file=self.output or sys.stdout,
                flush=True,
            )
            return 0

        argv = [self.resolve(command[0]), *command[1:]]
        logger.debug(f"Running: {format_command(argv)}")

        result = subprocess.run(argv, env=self.env)
        logger.debug(f"Exit code {result.returncode}: {format_command(command)}")
        return result.returncode
