"""
Step data model for BootKit.

Classes:
    Step: One ordered unit of bootstrap work bound to a directory
    BootstrapPlan: Mandatory steps plus the optional step and its prompt
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

Command = Tuple[str, ...]


def _normalize_commands(commands: Sequence[Sequence[str]]) -> Tuple[Command, ...]:
    normalized = []
    for command in commands:
        if isinstance(command, str):
            raise TypeError(
                f"Command must be a sequence of arguments, got string: {command!r}"
            )
        argv = tuple(str(arg) for arg in command)
        if not argv:
            raise ValueError("Command cannot be empty")
        normalized.append(argv)
    return tuple(normalized)


@dataclass(frozen=True)
class Step:
    """
    One unit of bootstrap work.

    Attributes:
        name: Step identifier, reported when the step fails
        description: Framing text printed before the step runs
        working_dir: Directory relative to the project root
        commands: Argument vectors run in order inside working_dir
        success_message: Optional text printed after the step succeeds

    Example:
        step = Step(
            name='api',
            description='Building API definitions...',
            working_dir=Path('tooling/api'),
            commands=(('yarn',), ('yarn', 'build')),
        )
    """

    name: str
    description: str
    working_dir: Path
    commands: Tuple[Command, ...]
    success_message: Optional[str] = None

    def __post_init__(self):
        """Validate and normalize fields after initialization."""
        if not self.name:
            raise ValueError("Step name cannot be empty")
        if not isinstance(self.working_dir, Path):
            object.__setattr__(self, "working_dir", Path(self.working_dir))
        object.__setattr__(self, "commands", _normalize_commands(self.commands))
        if not self.commands:
            raise ValueError(f"Step '{self.name}' has no commands")

    def executables(self) -> Tuple[str, ...]:
        """Distinct executables used by this step, in first-use order."""
        seen = []
        for command in self.commands:
            if command[0] not in seen:
                seen.append(command[0])
        return tuple(seen)


@dataclass(frozen=True)
class BootstrapPlan:
    """
    Ordered bootstrap plan.

    Attributes:
        steps: Mandatory steps, run in order
        optional_step: Step gated by the Yes/No decision (may be None)
        optional_prompt: Question shown before the optional step
        final_message: Text printed after the optional step completes
        requirements: Tool name to version specifier, used by the doctor check
    """

    steps: Tuple[Step, ...]
    optional_step: Optional[Step] = None
    optional_prompt: str = "Do you want to run the optional step?"
    final_message: Optional[str] = None
    requirements: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(
            self, "requirements", tuple(tuple(item) for item in self.requirements)
        )

        names = [step.name for step in self.all_steps()]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate step names: {', '.join(duplicates)}")

    def all_steps(self) -> Iterator[Step]:
        """Iterate mandatory steps followed by the optional step."""
        yield from self.steps
        if self.optional_step is not None:
            yield self.optional_step

    def executables(self) -> Tuple[str, ...]:
        """Distinct executables used anywhere in the plan."""
        seen = []
        for step in self.all_steps():
            for exe in step.executables():
                if exe not in seen:
                    seen.append(exe)
        return tuple(seen)
