# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from threading import Lock
from typing import Any

import pytest

from lintfilter.config import ResolvedLintConfig, ignore_patterns_from
from lintfilter.models import LintReport, LintSource

COLOR_RULE = "no-color-literals"
COLOR_MESSAGE = "Color literals such as 'red' should only be used in variable declarations"
IMPORTANT_RULE = "no-important"
IMPORTANT_MESSAGE = "!important not allowed"

VIOLATING_SCSS = "a {\n  color: red;\n}\n"
WARNING_SCSS = "b {\n  margin: 0 !important;\n}\n"
CLEAN_SCSS = "c {\n  color: $brand;\n}\n"


class FakeEngine:
    """Lint engine stub counting calls.

    ``red`` literals are errors and ``!important`` is a warning, reported in
    the sass-lint mapping shape.
    """

    def __init__(self, rules: Mapping[str, Any] | None = None) -> None:
        self.rules = dict(rules or {COLOR_RULE: 2, IMPORTANT_RULE: 1})
        self.lint_calls = 0
        self.config_calls = 0
        self.sources: list[LintSource] = []
        self.configs: list[ResolvedLintConfig] = []
        self.outputs: list[list[LintReport]] = []
        self._lock = Lock()

    def lint_text(
        self,
        source: LintSource,
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> dict[str, Any]:
        with self._lock:
            self.lint_calls += 1
            self.sources.append(source)
            self.configs.append(config)
        messages: list[dict[str, Any]] = []
        for number, line in enumerate(source.text.splitlines(), start=1):
            column = line.find("red")
            if column >= 0 and COLOR_RULE in self.rules:
                messages.append(
                    {
                        "ruleId": COLOR_RULE,
                        "line": number,
                        "column": column + 1,
                        "message": COLOR_MESSAGE,
                        "severity": self.rules[COLOR_RULE],
                    },
                )
            column = line.find("!important")
            if column >= 0 and IMPORTANT_RULE in self.rules:
                messages.append(
                    {
                        "ruleId": IMPORTANT_RULE,
                        "line": number,
                        "column": column + 1,
                        "message": IMPORTANT_MESSAGE,
                        "severity": self.rules[IMPORTANT_RULE],
                    },
                )
        return {"filePath": source.filename, "messages": messages}

    def get_config(self, options: Mapping[str, Any], config_path: Path | None) -> dict[str, Any]:
        with self._lock:
            self.config_calls += 1
        return {
            "files": {"ignore": ignore_patterns_from(options)},
            "rules": dict(self.rules),
            "config": str(config_path) if config_path else None,
        }

    def output_results(
        self,
        reports: Sequence[LintReport],
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> None:
        self.outputs.append(list(reports))


class ExplodingEngine(FakeEngine):
    """Lint engine stub whose linter crashes."""

    def lint_text(
        self,
        source: LintSource,
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> dict[str, Any]:
        raise RuntimeError(f"parse failure in {source.filename}")


@pytest.fixture
def engine() -> FakeEngine:
    """Return a fresh counting lint engine."""
    return FakeEngine()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Return an input tree with one violating, one warning and one clean file."""

    root = tmp_path / "styles"
    (root / "components").mkdir(parents=True)
    (root / "vendor").mkdir()
    (root / "a.scss").write_text(VIOLATING_SCSS, encoding="utf-8")
    (root / "components" / "b.scss").write_text(WARNING_SCSS, encoding="utf-8")
    (root / "components" / "c.sass").write_text(CLEAN_SCSS, encoding="utf-8")
    (root / "vendor" / "reset.scss").write_text(VIOLATING_SCSS, encoding="utf-8")
    (root / "readme.txt").write_text("not a stylesheet\n", encoding="utf-8")
    return root


@pytest.fixture
def engine_factory() -> type[FakeEngine]:
    """Return the fake engine class for tests needing custom rule sets."""
    return FakeEngine


@pytest.fixture
def exploding_engine() -> ExplodingEngine:
    """Return an engine whose linter raises for every file."""
    return ExplodingEngine()
