"""
Environment-driven settings for BootKit.

The optional step is controlled by the ``INSTALL_NODE_CLI`` environment
variable:

- unset or empty: ask interactively
- ``"1"``: run the optional step without asking
- anything else: skip the optional step without asking

Strict mode narrows the last rule: only ``"0"`` means "skip" and any other
value is a configuration error.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bootkit.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

INSTALL_OPTIONAL_ENV = "INSTALL_NODE_CLI"
TRUTHY_SENTINEL = "1"
FALSY_SENTINEL = "0"


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Run settings, read once at start.

    Attributes:
        install_optional: True to run the optional step, False to skip it,
            None to prompt interactively
        raw_value: Environment value the decision came from (None if unset)
    """

    install_optional: Optional[bool] = None
    raw_value: Optional[str] = None

    @property
    def should_prompt(self) -> bool:
        """Whether the optional-step decision needs user input."""
        return self.install_optional is None

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, strict: bool = False
    ) -> "BootstrapConfig":
        """
        Build configuration from the process environment.

        Args:
            environ: Environment mapping (default: os.environ)
            strict: Reject values other than "1" and "0"

        Returns:
            BootstrapConfig instance

        Raises:
            ConfigurationError: If strict and the value is not recognized
        """
        if environ is None:
            environ = os.environ

        value = environ.get(INSTALL_OPTIONAL_ENV)
        return cls(install_optional=parse_install_flag(value, strict), raw_value=value)


def parse_install_flag(value: Optional[str], strict: bool = False) -> Optional[bool]:
    """
    Interpret an ``INSTALL_NODE_CLI`` value.

    Args:
        value: Raw environment value, or None if unset
        strict: Reject values other than "1" and "0"

    Returns:
        True, False, or None when the user should be prompted

    Raises:
        ConfigurationError: If strict and the value is not recognized
    """
    if value is None or value == "":
        return None

    if value == TRUTHY_SENTINEL:
        return True

    if strict and value != FALSY_SENTINEL:
        raise ConfigurationError(
            f"Invalid {INSTALL_OPTIONAL_ENV} value: {value!r} "
            f"(expected '{TRUTHY_SENTINEL}' or '{FALSY_SENTINEL}')"
        )

    if value != FALSY_SENTINEL:
        logger.debug(f"Treating {INSTALL_OPTIONAL_ENV}={value!r} as 'No'")
    return False
