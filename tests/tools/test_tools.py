"""Tests for external tool detection."""

import subprocess
import sys
from unittest.mock import Mock, patch

import pytest
from packaging.version import Version

from bootkit.core.exceptions import ToolNotFoundError, ToolVersionError
from bootkit.tools import ToolDetector, ToolRequirement, extract_version


class TestExtractVersion:
    @pytest.mark.parametrize(
        "output,expected",
        [
            ("1.22.19\n", "1.22.19"),
            ("cargo 1.78.0 (54d8815d0 2024-03-26)", "1.78.0"),
            ("v20.10.0", "20.10.0"),
        ],
    )
    def test_versions(self, output, expected):
        assert extract_version(output) == Version(expected)

    def test_no_version(self):
        assert extract_version("no digits here") is None


class TestToolRequirement:
    def test_any_version(self):
        requirement = ToolRequirement("yarn")
        assert requirement.is_satisfied_by(Version("0.1"))
        assert requirement.is_satisfied_by(None)

    def test_minimum_version(self):
        requirement = ToolRequirement("yarn", ">=1.22")
        assert requirement.is_satisfied_by(Version("1.22.19"))
        assert not requirement.is_satisfied_by(Version("1.21.0"))

    def test_unknown_version_fails_specifier(self):
        assert not ToolRequirement("yarn", ">=1").is_satisfied_by(None)

    def test_invalid_specifier(self):
        with pytest.raises(ValueError, match="Invalid version specifier"):
            ToolRequirement("yarn", "newest")

    def test_empty_name(self):
        with pytest.raises(ValueError):
            ToolRequirement("")


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestToolDetector:
    def test_find_missing(self):
        with patch("bootkit.tools.base.shutil.which", return_value=None):
            with pytest.raises(ToolNotFoundError):
                ToolDetector().find("yarn")

    def test_detect_version(self):
        with patch("bootkit.tools.base.shutil.which", return_value="/usr/bin/yarn"):
            with patch(
                "bootkit.tools.base.subprocess.run",
                return_value=completed(stdout="1.22.19\n"),
            ) as mock_run:
                info = ToolDetector().detect("yarn")

        assert info.path == "/usr/bin/yarn"
        assert info.version == Version("1.22.19")
        assert mock_run.call_args[0][0] == ["/usr/bin/yarn", "--version"]

    def test_version_on_stderr(self):
        with patch("bootkit.tools.base.shutil.which", return_value="/bin/tool"):
            with patch(
                "bootkit.tools.base.subprocess.run",
                return_value=completed(stderr="tool version 2.0.1"),
            ):
                info = ToolDetector().detect("tool")

        assert info.version == Version("2.0.1")

    def test_version_command_fails(self):
        with patch("bootkit.tools.base.shutil.which", return_value="/bin/tool"):
            with patch(
                "bootkit.tools.base.subprocess.run",
                return_value=completed(returncode=2),
            ):
                with pytest.raises(ToolVersionError, match="exit code 2"):
                    ToolDetector().detect("tool")

    def test_version_command_times_out(self):
        with patch("bootkit.tools.base.shutil.which", return_value="/bin/tool"):
            with patch(
                "bootkit.tools.base.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="tool", timeout=1),
            ):
                with pytest.raises(ToolVersionError):
                    ToolDetector().detect("tool")

    def test_check_too_old(self):
        detector = ToolDetector()
        detector.detect = Mock(
            return_value=Mock(version=Version("1.0.0"), path="/bin/yarn")
        )

        with pytest.raises(ToolVersionError, match="does not satisfy"):
            detector.check(ToolRequirement("yarn", ">=1.22"))

    def test_check_real_python(self):
        """Test detection against the running interpreter."""
        info = ToolDetector().check(ToolRequirement(sys.executable, ">=3"))
        assert info.version.major == sys.version_info.major
