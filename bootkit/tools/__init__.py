"""
External tool detection for BootKit.
"""

from bootkit.tools.base import (
    ToolDetector,
    ToolInfo,
    ToolRequirement,
    extract_version,
)

__all__ = [
    "ToolDetector",
    "ToolInfo",
    "ToolRequirement",
    "extract_version",
]
