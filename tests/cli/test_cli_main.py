# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI tests.

Most tests call `run()` in-process with a recording runner so no real pnpm
or npm is needed. A couple go through `python -m themepub.cli.main` the way
a user would, to catch broken imports or entrypoint wiring.
"""

import json
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from themepub.cli.exit_codes import FAILURE, SUCCESS
from themepub.cli.main import run


def _run_cli(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run `themepub` as a module with the given arguments and capture output."""
    return subprocess.run(
        [sys.executable, "-m", "themepub.cli.main", *args],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=str(cwd),
    )


class TestHelp:
    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_prints_usage_and_exits_zero(
        self, flag: str, recording_runner, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = run([flag, "--skip-build"], runner=recording_runner, cwd=tmp_path)

        assert exit_code == SUCCESS
        assert "Usage: themepub" in capsys.readouterr().out

    def test_help_has_no_side_effects(self, recording_runner, workspace: Path) -> None:
        before = sorted(p.relative_to(workspace) for p in workspace.rglob("*"))

        exit_code = run(["--help"], runner=recording_runner, cwd=workspace)

        assert exit_code == SUCCESS
        assert recording_runner.calls == []
        assert sorted(p.relative_to(workspace) for p in workspace.rglob("*")) == before
        assert not (workspace / "tmp").exists()

    def test_help_ignores_broken_config(self, broken_yaml_file: Path, recording_runner) -> None:
        assert run(["--help", "--config", str(broken_yaml_file)], runner=recording_runner) == SUCCESS

    def test_help_via_module_entrypoint(self, tmp_path: Path) -> None:
        result = _run_cli("--help", cwd=tmp_path)
        assert result.returncode == 0
        assert "--skip-build" in result.stdout


class TestFullRun:
    def test_runs_all_steps_in_order(self, recording_runner, workspace: Path) -> None:
        exit_code = run([], runner=recording_runner, cwd=workspace)

        assert exit_code == SUCCESS
        assert recording_runner.commands == [
            ("pnpm", "--filter", "nextra-theme-docs", "build"),
            ("npm", "login"),
            ("npm", "publish"),
        ]
        manifest = json.loads((workspace / "tmp" / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "nextra-theme-docs-neovate"

    def test_skip_build_skips_only_the_build(self, recording_runner, workspace: Path) -> None:
        exit_code = run(["--skip-build"], runner=recording_runner, cwd=workspace)

        assert exit_code == SUCCESS
        assert recording_runner.commands == [("npm", "login"), ("npm", "publish")]

    def test_runs_from_nested_directory(self, recording_runner, theme_package: Path, workspace: Path) -> None:
        exit_code = run(["--skip-build"], runner=recording_runner, cwd=theme_package / "dist")

        assert exit_code == SUCCESS
        assert (workspace / "tmp" / "package.json").is_file()

    def test_config_file_overrides_defaults(
        self, recording_runner, workspace: Path, tmp_config_file: Path
    ) -> None:
        exit_code = run(
            ["--skip-build", "--config", str(tmp_config_file)],
            runner=recording_runner,
            cwd=workspace,
        )

        assert exit_code == SUCCESS
        staged = workspace / "out" / "stage" / "package.json"
        assert json.loads(staged.read_text(encoding="utf-8"))["name"] == "nextra-theme-docs-fork"
        assert recording_runner.calls[0] == (("npm", "whoami"), workspace / "out" / "stage")

    def test_logs_are_json_lines(
        self, recording_runner, workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run(["--skip-build"], runner=recording_runner, cwd=workspace)

        lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
        assert lines
        for line in lines:
            assert "msg" in json.loads(line)


class TestFailures:
    def test_failed_command_exits_one_and_stops(
        self, make_runner, workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        runner = make_runner(fail_on=("npm", "login"), exit_code=7)

        exit_code = run([], runner=runner, cwd=workspace)

        assert exit_code == FAILURE
        assert ("npm", "publish") not in runner.commands
        assert "Error: Command failed with exit code 7" in capsys.readouterr().err

    def test_failed_build_skips_staging(self, make_runner, workspace: Path) -> None:
        runner = make_runner(fail_on=("pnpm",))

        assert run([], runner=runner, cwd=workspace) == FAILURE
        assert runner.commands == [("pnpm", "--filter", "nextra-theme-docs", "build")]
        assert not (workspace / "tmp").exists()

    def test_missing_workspace_exits_one(
        self, recording_runner, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = run(["--skip-build"], runner=recording_runner, cwd=tmp_path)

        assert exit_code == FAILURE
        assert recording_runner.calls == []
        assert capsys.readouterr().err.startswith("Error: Cannot find workspace root")

    def test_invalid_config_exits_one(
        self, recording_runner, workspace: Path, invalid_config_file: Path
    ) -> None:
        exit_code = run(["--config", str(invalid_config_file)], runner=recording_runner, cwd=workspace)

        assert exit_code == FAILURE
        assert recording_runner.calls == []

    def test_missing_config_exits_one(self, recording_runner, workspace: Path) -> None:
        exit_code = run(["--config", "/nonexistent/themepub.yaml"], runner=recording_runner, cwd=workspace)
        assert exit_code == FAILURE

    def test_missing_source_exits_one(self, recording_runner, workspace: Path, theme_package: Path) -> None:
        shutil.rmtree(theme_package)

        assert run(["--skip-build"], runner=recording_runner, cwd=workspace) == FAILURE
        assert recording_runner.calls == []

    def test_module_entrypoint_reports_error(self, tmp_path: Path) -> None:
        result = _run_cli("--skip-build", "--dry-run", cwd=tmp_path)
        assert result.returncode == 1
        assert result.stderr.startswith("Error: ")


class TestDryRun:
    def test_dry_run_stages_without_running_commands(
        self, workspace: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = run(["--dry-run"], cwd=workspace)

        assert exit_code == SUCCESS
        assert (workspace / "tmp" / "package.json").is_file()
        out = capsys.readouterr().out
        assert "Dry run" in out
        assert "npm publish" in out
