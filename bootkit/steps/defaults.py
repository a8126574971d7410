"""
Default bootstrap plan.

Builds the API definitions with yarn, installs the Rust CLI with cargo and
offers to link the Node.js CLI. Paths are relative to the project root.
"""

from pathlib import Path

from bootkit.steps.base import BootstrapPlan, Step

API_STEP = Step(
    name="api",
    description="Building API definitions...",
    working_dir=Path("tooling/api"),
    commands=(("yarn",), ("yarn", "build")),
)

RUST_CLI_STEP = Step(
    name="rust-cli",
    description="Building the Tauri Rust CLI...",
    working_dir=Path("tooling/cli"),
    commands=(("cargo", "install", "--path", "."),),
    success_message="Tauri Rust CLI installed. Run it with '$ cargo tauri [COMMAND]'.",
)

NODE_CLI_STEP = Step(
    name="node-cli",
    description="Building the Tauri Node.js CLI...",
    working_dir=Path("tooling/cli/node"),
    commands=(("yarn",), ("yarn", "build"), ("yarn", "link")),
)

NODE_CLI_PROMPT = "Do you want to install the Node.js CLI?"

NODE_CLI_MESSAGE = (
    "Tauri Node.js CLI installed. Use 'yarn link @tauri-apps/cli' and run it "
    "with '$ yarn tauri [COMMAND]'."
)


def default_plan() -> BootstrapPlan:
    """Return the built-in bootstrap plan."""
    return BootstrapPlan(
        steps=(API_STEP, RUST_CLI_STEP),
        optional_step=NODE_CLI_STEP,
        optional_prompt=NODE_CLI_PROMPT,
        final_message=NODE_CLI_MESSAGE,
    )
