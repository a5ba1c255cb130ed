# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine backend that shells out to the ``scss-lint`` command line tool."""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from ..config import FILTER_OPTION_NAMES, IGNORE_KEY, IGNORE_SECTION, FilterOptions, ResolvedLintConfig, ignore_patterns_from
from ..models import LintReport, LintSource, Message
from ..process import run_command
from ..reporting import build_reporter

LOGGER = logging.getLogger(__name__)

SCSS_LINT_EXECUTABLE: Final[str] = "scss-lint"
BUNDLE_EXEC_PREFIX: Final[tuple[str, ...]] = ("bundle", "exec")
# 0: clean, 1: warnings only, 2: errors. Anything else is a tool failure.
REPORT_EXIT_CODES: Final[tuple[int, ...]] = (0, 1, 2)
_FILTER_OPTION_KEYS: Final[frozenset[str]] = FILTER_OPTION_NAMES | {IGNORE_SECTION}
_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>.+?):(?P<line>\d+)(?::(?P<column>\d+))?\s+"
    r"\[(?P<severity>[WE])\]\s+"
    r"(?:(?P<rule>[A-Za-z]\w*):\s+)?"
    r"(?P<message>.*)$",
)

CommandRunner = Callable[..., Any]


def build_command(source: LintSource, options: Mapping[str, Any], config_path: Path | None) -> list[str]:
    """Return the ``scss-lint`` invocation linting ``source`` from stdin.

    Scalar pass-through options become ``--key value`` pairs, ``True`` becomes
    a bare ``--key`` flag and sequences repeat the flag per item.

    Args:
        source: File being linted; its filename is passed as the stdin path.
        options: Raw filter options.
        config_path: Optional rule-config file.

    Returns:
        list[str]: Command line arguments.
    """

    parts: list[str] = []
    if options.get("bundleExec") or options.get("bundle_exec"):
        parts.extend(BUNDLE_EXEC_PREFIX)
    parts.extend([SCSS_LINT_EXECUTABLE, "--stdin-file-path", source.filename, "--format", "Default", "--no-color"])
    if config_path is not None:
        parts.extend(["--config", str(config_path)])
    for key in sorted(options):
        if key in _FILTER_OPTION_KEYS:
            continue
        parts.extend(_option_arguments(key, options[key]))
    return parts


def _option_arguments(key: str, value: object) -> list[str]:
    flag = f"--{key}"
    if value is True:
        return [flag]
    if value is None or value is False or callable(value) or isinstance(value, Mapping):
        return []
    if isinstance(value, Sequence) and not isinstance(value, str):
        arguments: list[str] = []
        for item in value:
            arguments.extend([flag, str(item)])
        return arguments
    return [flag, str(value)]


def parse_scss_lint_output(stdout: str, relative_path: str) -> LintReport:
    """Parse ``scss-lint`` default formatter output into a report.

    Lines look like ``path:line:column [W] RuleName: description``; older
    releases omit the column. Lines that do not match are ignored.
    """

    messages: list[Message] = []
    for raw_line in stdout.splitlines():
        match = _LINE_PATTERN.match(raw_line.strip())
        if match is None:
            continue
        messages.append(
            Message(
                line=int(match.group("line")),
                column=int(match.group("column") or 0),
                rule_id=match.group("rule") or "",
                severity=match.group("severity"),
                message=match.group("message").strip(),
            ),
        )
    return LintReport(file_path=relative_path, messages=tuple(messages))


class ScssLintCommandEngine:
    """Run ``scss-lint`` once per file, feeding the content through stdin."""

    def __init__(self, *, cwd: Path | None = None, runner: CommandRunner = run_command) -> None:
        self._cwd = cwd
        self._runner = runner

    def lint_text(
        self,
        source: LintSource,
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> LintReport:
        """Lint ``source`` and parse the tool output.

        Raises:
            FileNotFoundError: If ``scss-lint`` (or ``bundle``) is not installed.
            SubprocessExecutionError: If the tool exits with a status outside
            ``REPORT_EXIT_CODES``.
        """

        command = build_command(source, options, config.config_path)
        completed = self._runner(
            command,
            cwd=self._cwd,
            input_text=source.text,
            accepted_returncodes=REPORT_EXIT_CODES,
        )
        LOGGER.debug("scss-lint exited with %s for %s", completed.returncode, source.filename)
        return parse_scss_lint_output(completed.stdout or "", source.filename)

    def get_config(self, options: Mapping[str, Any], config_path: Path | None) -> Mapping[str, Any]:
        """Return the ignore rules plus a digest of the rule-config file.

        The rule file itself is interpreted by ``scss-lint``; hashing its
        bytes is enough for edits to invalidate cached results.
        """

        settings: dict[str, Any] = {IGNORE_SECTION: {IGNORE_KEY: ignore_patterns_from(options)}}
        if config_path is not None:
            settings["config_digest"] = _file_digest(self._resolve(config_path))
        return settings

    def output_results(
        self,
        reports: Sequence[LintReport],
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> None:
        """Emit ``reports`` through the sink selected by the options."""

        _ = config
        build_reporter(FilterOptions.from_mapping(options)).emit(reports)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute() or self._cwd is None:
            return path
        return self._cwd / path


def _file_digest(path: Path) -> str | None:
    try:
        return hashlib.sha256(path.read_bytes()).hexdigest()
    except OSError as exc:
        LOGGER.warning("unable to read scss-lint config %s: %s", path, exc)
        return None


__all__ = [
    "REPORT_EXIT_CODES",
    "SCSS_LINT_EXECUTABLE",
    "ScssLintCommandEngine",
    "build_command",
    "parse_scss_lint_output",
]
