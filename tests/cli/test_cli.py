"""
Tests for the BootKit CLI.

End-to-end runs use plan files whose commands invoke the running Python
interpreter, so no yarn or cargo installation is needed.
"""

import sys
from pathlib import Path

import pytest
import yaml

from bootkit.cli.parser import CLI
from bootkit.config.settings import INSTALL_OPTIONAL_ENV


def py(code: str):
    return [sys.executable, "-c", code]


def write_plan(root: Path, steps, optional=None) -> Path:
    data = {"steps": steps}
    if optional is not None:
        data["optional_step"] = optional
    path = root / "bootkit.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path


def step(name, directory, *commands, **extra):
    return dict(name=name, directory=directory, commands=list(commands), **extra)


@pytest.fixture
def python_project(project_root):
    """Project whose plan prints markers instead of calling yarn/cargo."""
    write_plan(
        project_root,
        [
            step(
                "api",
                "tooling/api",
                py("print('API-BUILT')"),
                description="Building API...",
            ),
            step("cli", "tooling/cli", py("print('CLI-INSTALLED')")),
        ],
        optional=step(
            "node-cli",
            "tooling/cli/node",
            py("print('NODE-LINKED')"),
            prompt="Install the Node CLI?",
            final_message="Node CLI ready.",
        ),
    )
    return project_root


class TestParser:
    def test_no_arguments(self):
        """Test the CLI accepts no arguments at all."""
        args = CLI().parse_args([])

        assert args.dry_run is False
        assert args.list_steps is False
        assert args.check is False
        assert args.strict_env is False
        assert args.project_root is None
        assert args.config is None
        assert args.lock_timeout == 10.0

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "BootKit" in capsys.readouterr().out

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["--dry-run", "--check"])

    def test_help_mentions_environment(self):
        assert INSTALL_OPTIONAL_ENV in CLI().parser.format_help()


class TestRun:
    def test_env_yes(self, python_project, monkeypatch, capfd):
        """Test INSTALL_NODE_CLI=1 runs everything and exits 0."""
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "1")

        code = CLI().run(["--project-root", str(python_project)])

        out = capfd.readouterr().out
        assert code == 0
        assert "API-BUILT" in out
        assert "CLI-INSTALLED" in out
        assert "NODE-LINKED" in out
        assert "Node CLI ready." in out
        assert "Install the Node CLI?" not in out

    def test_prompt_no_exits_zero(self, python_project, monkeypatch, capfd):
        """Test answering No skips the optional step and exits 0."""
        monkeypatch.setattr("builtins.input", lambda _prompt: "2")

        code = CLI().run(["--project-root", str(python_project)])

        out = capfd.readouterr().out
        assert code == 0
        assert "Install the Node CLI?" in out
        assert "NODE-LINKED" not in out

    def test_prompt_yes(self, python_project, monkeypatch, capfd):
        monkeypatch.setattr("builtins.input", lambda _prompt: "1")

        code = CLI().run(["--project-root", str(python_project)])

        assert code == 0
        assert "NODE-LINKED" in capfd.readouterr().out

    def test_failing_step_propagates_exit_code(self, project_root, monkeypatch, capfd):
        """Test a failing step stops the run with the command's exit code."""
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "1")
        write_plan(
            project_root,
            [
                step("api", "tooling/api", py("import sys; sys.exit(3)")),
                step("cli", "tooling/cli", py("print('LATER-STEP')")),
            ],
            optional=step("node-cli", "tooling/cli/node", py("print('NODE-LINKED')")),
        )

        code = CLI().run(["--project-root", str(project_root)])

        captured = capfd.readouterr()
        assert code == 3
        assert "LATER-STEP" not in captured.out
        assert "NODE-LINKED" not in captured.out
        assert "Step 'api' failed" in captured.err

    def test_failure_exit_code_one(self, project_root, capfd):
        write_plan(
            project_root, [step("api", "tooling/api", py("raise SystemExit(1)"))]
        )

        assert CLI().run(["--project-root", str(project_root)]) == 1

    def test_default_plan_missing_directories(self, tmp_path, monkeypatch, capsys):
        """Test running outside a project reports the missing directory."""
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "0")

        code = CLI().run(["--project-root", str(tmp_path)])

        assert code == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_strict_env_rejects_value(self, python_project, monkeypatch, capsys):
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "true")

        code = CLI().run(["--project-root", str(python_project), "--strict-env"])

        assert code == 1
        assert "Invalid INSTALL_NODE_CLI value" in capsys.readouterr().err

    def test_permissive_env_is_no(self, python_project, monkeypatch, capfd):
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "true")

        code = CLI().run(["--project-root", str(python_project)])

        assert code == 0
        assert "NODE-LINKED" not in capfd.readouterr().out

    def test_dry_run(self, project_root, monkeypatch, capfd):
        """Test dry-run previews the built-in plan without running yarn/cargo."""
        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "1")

        code = CLI().run(["--project-root", str(project_root), "--dry-run"])

        out = capfd.readouterr().out
        assert code == 0
        assert "[dry-run] yarn build" in out
        assert "[dry-run] yarn link" in out
        assert "3 step(s) previewed" in out

    def test_list_steps(self, project_root, capsys):
        code = CLI().run(["--project-root", str(project_root), "--list-steps"])

        out = capsys.readouterr().out
        assert code == 0
        assert "1. api (tooling/api)" in out
        assert "$ cargo install --path ." in out
        assert "node-cli (tooling/cli/node)" in out

    def test_explicit_config(self, project_root, tmp_path, capfd):
        plan_file = tmp_path / "custom.yaml"
        with open(plan_file, "w") as f:
            yaml.safe_dump(
                {"steps": [step("only", "tooling/api", py("print('CUSTOM')"))]}, f
            )

        code = CLI().run(
            ["--project-root", str(project_root), "--config", str(plan_file)]
        )

        assert code == 0
        assert "CUSTOM" in capfd.readouterr().out

    def test_invalid_project_root(self, tmp_path, capsys):
        code = CLI().run(["--project-root", str(tmp_path / "missing")])

        assert code == 1
        assert "not a directory" in capsys.readouterr().err

    def test_config_is_directory(self, project_root, tmp_path, capsys):
        """Test --config pointing at a directory reports a clean error."""
        code = CLI().run(
            ["--project-root", str(project_root), "--config", str(tmp_path)]
        )

        assert code == 1
        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "not a regular file" in err

    def test_lock_held_by_other_run(self, python_project, monkeypatch, capsys):
        """Test a concurrent run on the same project is refused."""
        from bootkit.core.locking import RunLock

        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "0")

        with RunLock(python_project).acquire(timeout=1):
            code = CLI().run(
                ["--project-root", str(python_project), "--lock-timeout", "0.1"]
            )

        assert code == 1
        assert "Another BootKit process" in capsys.readouterr().err

    def test_keyboard_interrupt(self, python_project, monkeypatch):
        def _interrupt(_prompt):
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", _interrupt)

        assert CLI().run(["--project-root", str(python_project)]) == 130

    def test_working_directory_unchanged(self, python_project, monkeypatch):
        import os

        monkeypatch.setenv(INSTALL_OPTIONAL_ENV, "1")
        before = os.getcwd()

        CLI().run(["--project-root", str(python_project)])

        assert os.getcwd() == before
