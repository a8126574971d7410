"""
Run locking for BootKit.

Bootstrapping mutates the process working directory and invokes installers
that write into the project tree, so two BootKit processes must never work on
the same project root at once. This module provides a cross-process file
lock keyed by the resolved project root, built on the ``filelock`` library.

Usage:
    from bootkit.core.locking import RunLock

    with RunLock(project_root).acquire(timeout=10):
        orchestrator.run(config)
"""

import hashlib
import logging
import platform
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

from bootkit.core.exceptions import BootKitError, RunLockTimeout

logger = logging.getLogger(__name__)


def get_global_cache_dir() -> Path:
    """
    Get the per-user BootKit directory used for lock files.

    Returns:
        Path to global cache directory
    """
    if platform.system() == "Windows":
        return Path.home() / "AppData" / "Local" / "bootkit"
    return Path.home() / ".bootkit"


class RunLock:
    """
    Cross-process lock guarding a bootstrap run for one project root.

    Attributes:
        project_root: Resolved project root the lock belongs to
        lock_dir: Directory where lock files are stored
        lock_path: Lock file for this project root
    """

    def __init__(self, project_root: Path, lock_dir: Optional[Path] = None):
        """
        Initialize run lock.

        Args:
            project_root: Project root directory being bootstrapped
            lock_dir: Directory for lock files (default: global cache/lock/)

        Raises:
            BootKitError: If the lock directory cannot be created
        """
        if lock_dir is None:
            lock_dir = get_global_cache_dir() / "lock"

        self.project_root = Path(project_root).resolve()
        self.lock_dir = Path(lock_dir)
        try:
            self.lock_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootKitError(
                f"Cannot create lock directory {self.lock_dir}: {e}"
            ) from e

        digest = hashlib.sha256(str(self.project_root).encode("utf-8")).hexdigest()
        self.lock_path = self.lock_dir / f"run-{digest[:16]}.lock"

    @contextmanager
    def acquire(self, timeout: float = 10):
        """
        Hold the run lock for the duration of the ``with`` block.

        Args:
            timeout: Maximum wait time in seconds (0 fails immediately)

        Yields:
            None

        Raises:
            RunLockTimeout: If the lock can't be acquired within timeout
        """
        lock = FileLock(self.lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired run lock: {self.lock_path}")
                yield
                logger.debug(f"Released run lock: {self.lock_path}")
        except LockTimeout as e:
            raise RunLockTimeout(
                f"Could not acquire run lock for {self.project_root} after {timeout}s. "
                "Another BootKit process may be running."
            ) from e
