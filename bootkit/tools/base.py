"""
External tool detection for BootKit.

Bootstrap steps delegate to tools such as yarn and cargo. This module finds
those tools on PATH, reads their versions and checks them against version
specifiers from the plan file.

Classes:
    ToolInfo: Detected tool location and version
    ToolRequirement: Tool name with an optional version specifier
    ToolDetector: Locate tools and query their versions
"""

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from bootkit.core.exceptions import ToolNotFoundError, ToolVersionError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


def extract_version(output: str) -> Optional[Version]:
    """
    Extract the first dotted version number from tool output.

    Example:
        >>> extract_version("cargo 1.78.0 (54d8815d0 2024-03-26)")
        <Version('1.78.0')>
    """
    match = VERSION_PATTERN.search(output)
    if not match:
        return None
    try:
        return Version(match.group(1))
    except InvalidVersion:
        return None


@dataclass(frozen=True)
class ToolInfo:
    """Detected tool."""

    name: str
    path: str
    version: Optional[Version] = None


@dataclass(frozen=True)
class ToolRequirement:
    """
    Version requirement for a tool.

    Attributes:
        name: Executable name (e.g., 'yarn')
        specifier: PEP 440 style specifier (e.g., '>=1.22'), empty for any version
    """

    name: str
    specifier: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Tool name cannot be empty")
        try:
            SpecifierSet(self.specifier)
        except InvalidSpecifier as e:
            raise ValueError(
                f"Invalid version specifier for {self.name}: {self.specifier!r}"
            ) from e

    def is_satisfied_by(self, version: Optional[Version]) -> bool:
        """Check a detected version against the specifier."""
        if not self.specifier:
            return True
        if version is None:
            return False
        return SpecifierSet(self.specifier).contains(version, prereleases=True)


class ToolDetector:
    """Locate external tools and query their versions."""

    def __init__(self, timeout: float = 10):
        self.timeout = timeout

    def find(self, name: str) -> str:
        """
        Find a tool on PATH.

        Raises:
            ToolNotFoundError: If the tool is not on PATH
        """
        path = shutil.which(name)
        if path is None:
            raise ToolNotFoundError(name)
        return path

    def detect(self, name: str) -> ToolInfo:
        """
        Detect a tool and its version.

        Returns:
            ToolInfo (version is None if it could not be parsed)

        Raises:
            ToolNotFoundError: If the tool is not on PATH
            ToolVersionError: If running '<tool> --version' fails
        """
        path = self.find(name)

        try:
            result = subprocess.run(
                [path, "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ToolVersionError(f"Failed to query {name} version: {e}") from e

        if result.returncode != 0:
            raise ToolVersionError(
                f"'{name} --version' failed with exit code {result.returncode}"
            )

        version = extract_version(result.stdout or result.stderr)
        logger.debug(f"Detected {name} at {path} (version {version})")
        return ToolInfo(name=name, path=path, version=version)

    def check(self, requirement: ToolRequirement) -> ToolInfo:
        """
        Detect a tool and verify it satisfies a requirement.

        Raises:
            ToolNotFoundError: If the tool is not on PATH
            ToolVersionError: If the version is unknown or too old/new
        """
        info = self.detect(requirement.name)
        if not requirement.is_satisfied_by(info.version):
            found = info.version if info.version is not None else "unknown"
            raise ToolVersionError(
                f"{requirement.name} {found} does not satisfy '{requirement.specifier}'"
            )
        return info
