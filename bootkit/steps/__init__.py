"""
Bootstrap step definitions.

This module exposes the step data model and the built-in plan.
"""

from bootkit.steps.base import BootstrapPlan, Command, Step
from bootkit.steps.defaults import default_plan

__all__ = [
    "BootstrapPlan",
    "Command",
    "Step",
    "default_plan",
]
