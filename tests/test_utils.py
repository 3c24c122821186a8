"""Unit tests for utility functions (flutter_scaffold.utils).

Tests cover:
- run_command (success, failure, missing executable, timeout, env vars)
- format_duration
- Rich output helpers (print_report, print_summary_table, etc.)
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from flutter_scaffold.scaffolder.results import ScaffoldReport, StepResult
from flutter_scaffold.utils import (
    format_duration,
    print_error,
    print_report,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command_list(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    async def test_failing_command(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    async def test_missing_executable(self):
        returncode, _, stderr = await run_command(["definitely-not-a-real-binary-xyz"])
        assert returncode == 127
        assert stderr

    @pytest.mark.unit
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(5)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_cwd_and_env(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd()); print(os.environ['SCAFFOLD_TEST'])"],
            cwd=tmp_path,
            env={"SCAFFOLD_TEST": "yes"},
        )
        assert returncode == 0
        cwd_line, env_line = stdout.splitlines()
        assert Path(cwd_line).resolve() == tmp_path.resolve()
        assert env_line == "yes"


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(-1, "0.0s"), (0, "0.0s"), (3.7, "3.7s"), (65.2, "1m 5s"), (600, "10m 0s")],
    )
    def test_formats(self, seconds, expected):
        assert format_duration(seconds) == expected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers_use_console(self):
        with patch("flutter_scaffold.utils.console") as console:
            print_success("done")
            print_error("bad")
            print_warning("hmm")
        printed = [call.args[0] for call in console.print.call_args_list]
        assert "[bold green]done[/bold green]" in printed
        assert "[bold red]bad[/bold red]" in printed
        assert "[bold yellow]hmm[/bold yellow]" in printed

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("flutter_scaffold.utils.console") as console:
            print_summary_table({"a": "1"}, title="T")
        table = console.print.call_args_list[0].args[0]
        assert table.title == "T"
        assert table.row_count == 1

    @pytest.mark.unit
    def test_print_report_one_row_per_step(self):
        report = ScaffoldReport(recipe="screen-only", feature_name="login")
        report.add(StepResult.success("login_screen"))
        report.add(StepResult.skipped("ui", "exists"))
        with patch("flutter_scaffold.utils.console") as console:
            print_report(report)
        table = console.print.call_args_list[0].args[0]
        assert table.row_count == 2
        assert "login" in table.title
