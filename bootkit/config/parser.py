"""YAML plan parser for BootKit.

This module loads ``bootkit.yaml`` plan files, which replace the built-in
bootstrap plan. Commands may be written as argument lists or as shell-like
strings, which are split with ``shlex``.
"""

import logging
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from bootkit.core.exceptions import ConfigurationError
from bootkit.steps.base import BootstrapPlan, Step
from bootkit.steps.defaults import default_plan
from bootkit.tools.base import ToolRequirement

logger = logging.getLogger(__name__)

DEFAULT_PLAN_FILE = "bootkit.yaml"


def load_plan(config_path: Path) -> BootstrapPlan:
    """
    Parse a bootkit.yaml plan file.

    Args:
        config_path: Path to the plan file

    Returns:
        Parsed and validated plan

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(f"Plan file not found: {config_path}")
    if not config_path.is_file():
        raise ConfigurationError(f"Plan file is not a regular file: {config_path}")

    logger.debug(f"Loading plan from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read plan file {config_path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Plan file is empty: {config_path}")
    if not isinstance(data, dict):
        raise ConfigurationError("Plan file must contain a mapping at the top level")

    return parse_plan(data)


def resolve_plan(
    project_root: Path, config_path: Optional[Path] = None
) -> BootstrapPlan:
    """
    Select the plan for a project.

    An explicit config path must exist. Otherwise ``bootkit.yaml`` in the
    project root is used when present, falling back to the built-in plan.
    """
    if config_path is not None:
        return load_plan(Path(config_path))

    default_file = Path(project_root) / DEFAULT_PLAN_FILE
    if default_file.exists():
        return load_plan(default_file)

    logger.debug("No plan file found, using built-in plan")
    return default_plan()


def parse_plan(data: Dict[str, Any]) -> BootstrapPlan:
    """Build a BootstrapPlan from parsed YAML data."""
    steps_data = data.get("steps")
    if not steps_data or not isinstance(steps_data, list):
        raise ConfigurationError("At least one step must be defined under 'steps'")

    steps = [_parse_step(step_data, "steps") for step_data in steps_data]

    optional_step = None
    prompt = "Do you want to run the optional step?"
    final_message = None

    optional_data = data.get("optional_step")
    if optional_data is not None:
        optional_step = _parse_step(optional_data, "optional_step")
        prompt = _get_text(optional_data, "prompt", "optional_step", prompt)
        final_message = _get_text(optional_data, "final_message", "optional_step")

    requirements_data = data.get("requirements")
    requirements = _parse_requirements(
        {} if requirements_data is None else requirements_data
    )

    try:
        return BootstrapPlan(
            steps=tuple(steps),
            optional_step=optional_step,
            optional_prompt=prompt,
            final_message=final_message,
            requirements=requirements,
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def _parse_step(data: Any, section: str) -> Step:
    """Parse a single step definition."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Each entry in '{section}' must be a mapping")

    for field_name in ("name", "directory", "commands"):
        if field_name not in data:
            raise ConfigurationError(
                f"Step in '{section}' missing required field: {field_name}"
            )

    name = data["name"]
    if not isinstance(name, str) or not name:
        raise ConfigurationError(
            f"Step in '{section}' has invalid name: {name!r} (expected text)"
        )
    commands = _parse_commands(data["commands"], name)

    try:
        return Step(
            name=name,
            description=_get_text(data, "description", section, f"Running {name}..."),
            working_dir=Path(data["directory"]),
            commands=commands,
            success_message=_get_text(data, "success_message", section),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid step '{name}': {e}") from e


def _parse_commands(data: Any, step_name: str) -> List[Tuple[str, ...]]:
    """Parse a list of commands given as strings or argument lists."""
    if not isinstance(data, list) or not data:
        raise ConfigurationError(f"Step '{step_name}' must list at least one command")

    commands = []
    for entry in data:
        if isinstance(entry, str):
            argv = shlex.split(entry)
        elif isinstance(entry, list):
            argv = [str(arg) for arg in entry]
        else:
            raise ConfigurationError(
                f"Step '{step_name}' has invalid command: {entry!r}"
            )

        if not argv:
            raise ConfigurationError(f"Step '{step_name}' has an empty command")
        commands.append(tuple(argv))

    return commands


def _parse_requirements(data: Any) -> Tuple[Tuple[str, str], ...]:
    """Parse the tool -> version specifier mapping."""
    if not isinstance(data, dict):
        raise ConfigurationError("'requirements' must be a mapping of tool to version")
    requirements = []
    for tool, spec in data.items():
        try:
            requirement = ToolRequirement(str(tool), str(spec))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        requirements.append((requirement.name, requirement.specifier))
    return tuple(requirements)


def _get_text(
    data: Dict[str, Any], key: str, section: str, default: Optional[str] = None
) -> Optional[str]:
    """Read an optional text field, rejecting keys present with non-string values."""
    if key not in data:
        return default

    value = data[key]
    if not isinstance(value, str):
        raise ConfigurationError(
            f"'{key}' in '{section}' must be text, got {value!r}"
        )
    return value
