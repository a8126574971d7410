"""
Pytest configuration and shared fixtures for BootKit tests.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from bootkit.config.settings import INSTALL_OPTIONAL_ENV
from bootkit.core.runner import CommandRunner


# ============================================================================
# Fake Runner
# ============================================================================


class RecordingRunner(CommandRunner):
    """
    CommandRunner that records commands instead of spawning processes.

    Attributes:
        calls: (command, working directory) pairs in execution order
        exit_codes: Exit code to return per command (default 0)
    """

    def __init__(self, exit_codes: Optional[Dict[Tuple[str, ...], int]] = None):
        super().__init__()
        self.calls: List[Tuple[Tuple[str, ...], Path]] = []
        self.exit_codes = exit_codes or {}

    def run(self, command: Sequence[str]) -> int:
        command = tuple(command)
        self.history.append(command)
        self.calls.append((command, Path(os.getcwd())))
        return self.exit_codes.get(command, 0)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep lock files and INSTALL_NODE_CLI out of the developer's environment."""
    cache_dir = tmp_path_factory.mktemp("bootkit-cache")
    monkeypatch.setattr(
        "bootkit.core.locking.get_global_cache_dir", lambda: cache_dir
    )
    monkeypatch.delenv(INSTALL_OPTIONAL_ENV, raising=False)


@pytest.fixture
def project_root(tmp_path) -> Path:
    """Project tree matching the built-in plan."""
    root = tmp_path / "project"
    (root / "tooling" / "api").mkdir(parents=True)
    (root / "tooling" / "cli" / "node").mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def runner() -> RecordingRunner:
    """Runner whose commands all succeed."""
    return RecordingRunner()


@pytest.fixture
def restore_cwd():
    """Restore the working directory if a test leaks a change."""
    previous = os.getcwd()
    yield previous
    os.chdir(previous)


@pytest.fixture
def make_runner():
    """Factory for runners with per-command exit codes."""

    def _make(exit_codes: Optional[Dict[Tuple[str, ...], int]] = None):
        return RecordingRunner(exit_codes)

    return _make
