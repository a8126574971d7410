"""
Filesystem helpers for BootKit.

Provides scoped working-directory changes and path resolution for step
directories. The process working directory is global state; every change
made here is undone when the enclosing ``with`` block exits.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)


class FilesystemError(Exception):
    """Base exception for filesystem helper errors."""

    pass


def resolve_step_directory(project_root: Path, working_dir: Union[str, Path]) -> Path:
    """
    Resolve a step directory relative to the project root.

    Args:
        project_root: Project root directory
        working_dir: Directory relative to the project root (absolute paths
            are used as-is)

    Returns:
        Absolute path to the step directory
    """
    path = Path(working_dir)
    if not path.is_absolute():
        path = Path(project_root) / path
    return path.resolve()


@contextmanager
def working_directory(path: Union[str, Path]) -> Iterator[Path]:
    """
    Context manager that changes into ``path`` and restores the previous
    working directory on exit, whether the block succeeds or raises.

    Args:
        path: Directory to change into

    Yields:
        Absolute path of the directory entered

    Raises:
        FilesystemError: If the directory does not exist or is not a directory

    Example:
        >>> with working_directory(Path('tooling/api')):
        ...     subprocess.run(['yarn'])
        >>> # back in the original directory
    """
    target = Path(path)
    if not target.is_dir():
        raise FilesystemError(f"Directory not found: {target}")

    previous = os.getcwd()
    os.chdir(target)
    logger.debug(f"Entered directory: {target}")
    try:
        yield Path(os.getcwd())
    finally:
        os.chdir(previous)
        logger.debug(f"Restored directory: {previous}")


__all__ = [
    "FilesystemError",
    "resolve_step_directory",
    "working_directory",
]
