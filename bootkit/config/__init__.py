"""Configuration module for BootKit.

This module provides environment settings and YAML plan file parsing.
"""

from bootkit.config.settings import (
    BootstrapConfig,
    INSTALL_OPTIONAL_ENV,
    TRUTHY_SENTINEL,
    parse_install_flag,
)
from bootkit.config.parser import (
    DEFAULT_PLAN_FILE,
    load_plan,
    parse_plan,
    resolve_plan,
)

__all__ = [
    "BootstrapConfig",
    "INSTALL_OPTIONAL_ENV",
    "TRUTHY_SENTINEL",
    "parse_install_flag",
    "DEFAULT_PLAN_FILE",
    "load_plan",
    "parse_plan",
    "resolve_plan",
]
