# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the scss-lint command line backend."""

from __future__ import annotations

import json
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from lintfilter.config import FILTER_OPTION_NAMES, ResolvedLintConfig
from lintfilter.engines import ScssLintCommandEngine, build_command, parse_scss_lint_output
from lintfilter.engines.scss_lint import REPORT_EXIT_CODES
from lintfilter.interfaces.engine import LintEngine
from lintfilter.models import LintReport, LintSource, Message
from lintfilter.process import SubprocessExecutionError, run_command
from lintfilter.severity import Severity

SCSS_LINT_OUTPUT = """\
a.scss:2:10 [E] ColorVariable: Color literals like `red` should only be used in variable declarations
a.scss:5 [W] Indentation: Line should be indented 2 spaces, but was indented 4
not a diagnostic line
"""


class RecordingRunner:
    """Stand-in for ``run_command`` capturing invocations."""

    def __init__(self, stdout: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, args: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(args), kwargs))
        return subprocess.CompletedProcess(list(args), self.returncode, stdout=self.stdout, stderr="")


def _source(path: str = "a.scss") -> LintSource:
    return LintSource(text="a {\n  color: red;\n}\n", format="scss", filename=path)


def test_parse_scss_lint_output() -> None:
    report = parse_scss_lint_output(SCSS_LINT_OUTPUT, "a.scss")

    assert report.file_path == "a.scss"
    assert report.error_count == 1
    assert report.warning_count == 1
    first, second = report.messages
    assert first == Message(
        line=2,
        column=10,
        rule_id="ColorVariable",
        severity=Severity.ERROR,
        message="Color literals like `red` should only be used in variable declarations",
    )
    assert (second.line, second.column, second.rule_id) == (5, 0, "Indentation")
    assert second.severity is Severity.WARNING


def test_parse_empty_output_is_clean() -> None:
    report = parse_scss_lint_output("", "a.scss")

    assert report.passed
    assert report.messages == ()


def test_build_command_maps_options_to_flags() -> None:
    command = build_command(
        _source("styles/a.scss"),
        {
            "bundleExec": True,
            "config": "lint.yml",
            "testGenerator": "qunit",
            "files": {"ignore": "vendor/**"},
            "exclude-linter": ["ColorVariable", "Indentation"],
            "require": "custom_linters",
            "verbose": True,
            "quiet": False,
            "formatter": len,
        },
        Path("lint.yml"),
    )

    assert command == [
        "bundle",
        "exec",
        "scss-lint",
        "--stdin-file-path",
        "styles/a.scss",
        "--format",
        "Default",
        "--no-color",
        "--config",
        "lint.yml",
        "--exclude-linter",
        "ColorVariable",
        "--exclude-linter",
        "Indentation",
        "--require",
        "custom_linters",
        "--verbose",
    ]


@pytest.mark.parametrize("key", sorted(FILTER_OPTION_NAMES))
def test_build_command_never_forwards_filter_options(key: str) -> None:
    command = build_command(_source("styles/a.scss"), {key: "value"}, None)

    assert f"--{key}" not in command
    assert "value" not in command


def test_lint_text_feeds_stdin_and_parses_output(tmp_path: Path) -> None:
    runner = RecordingRunner(stdout=SCSS_LINT_OUTPUT, returncode=2)
    engine = ScssLintCommandEngine(cwd=tmp_path, runner=runner)

    report = engine.lint_text(_source(), {}, ResolvedLintConfig())

    (args, kwargs) = runner.calls[0]
    assert args[:3] == ["scss-lint", "--stdin-file-path", "a.scss"]
    assert kwargs == {
        "cwd": tmp_path,
        "input_text": "a {\n  color: red;\n}\n",
        "accepted_returncodes": REPORT_EXIT_CODES,
    }
    assert isinstance(report, LintReport)
    assert report.error_count == 1


def test_engine_satisfies_protocol() -> None:
    assert isinstance(ScssLintCommandEngine(), LintEngine)


def test_get_config_digests_rule_file(tmp_path: Path) -> None:
    rules = tmp_path / "lint.yml"
    rules.write_text("linters:\n  ColorVariable:\n    enabled: true\n", encoding="utf-8")
    engine = ScssLintCommandEngine(cwd=tmp_path)

    first = engine.get_config({"files": {"ignore": ["vendor/**"]}}, Path("lint.yml"))
    rules.write_text("linters:\n  ColorVariable:\n    enabled: false\n", encoding="utf-8")
    second = engine.get_config({"files": {"ignore": ["vendor/**"]}}, Path("lint.yml"))

    assert first["files"] == {"ignore": ["vendor/**"]}
    assert first["config_digest"] != second["config_digest"]


def test_get_config_tolerates_missing_rule_file(tmp_path: Path) -> None:
    settings = ScssLintCommandEngine(cwd=tmp_path).get_config({}, Path("missing.yml"))

    assert settings["config_digest"] is None
    assert settings["files"] == {"ignore": None}


def test_output_results_honours_json_reporter(tmp_path: Path) -> None:
    destination = tmp_path / "lint.json"
    report = parse_scss_lint_output(SCSS_LINT_OUTPUT, "a.scss")

    ScssLintCommandEngine().output_results(
        [report],
        {"reporter": "json", "reportOut": str(destination)},
        ResolvedLintConfig(),
    )

    payload = json.loads(destination.read_text(encoding="utf-8"))
    assert payload["errorCount"] == 1
    assert payload["results"][0]["filePath"] == "a.scss"


def test_run_command_rejects_unexpected_exit_codes() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.exit(64)"], accepted_returncodes=REPORT_EXIT_CODES)

    assert excinfo.value.returncode == 64


def test_run_command_accepts_report_exit_codes() -> None:
    completed = run_command(
        [sys.executable, "-c", "import sys; print(sys.stdin.read().upper()); sys.exit(1)"],
        input_text="a {}",
        accepted_returncodes=REPORT_EXIT_CODES,
    )

    assert completed.returncode == 1
    assert completed.stdout.strip() == "A {}"


def test_run_command_reports_missing_executables() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-an-installed-scss-linter"])
