# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache-aware lint filter plugged into a tree-based build pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

from .cache.keys import build_key
from .config import FilterOptions, ResolvedLintConfig
from .diagnostics import PassContext, PassSummary
from .errors import LintThresholdExceeded
from .interfaces.engine import LintEngine
from .invoker import LintInvoker
from .matching import is_ignored
from .models import FilterResult, ProcessedFile
from .test_generators import TestGenerator, resolve_generator
from .tree import InputTree, replace_extension

LOGGER = logging.getLogger(__name__)

SOURCE_EXTENSIONS: Final[tuple[str, ...]] = ("sass", "scss")
DEFAULT_TARGET_EXTENSION: Final[str] = "scss"
TEST_TARGET_EXTENSION: Final[str] = "sass-lint-test.js"


class LintFilter:
    """Lint ``.sass``/``.scss`` files inside a host build pipeline.

    The host calls :meth:`compute_destination_path`, :meth:`compute_cache_key`
    and, on a cache miss, :meth:`transform` for every file, possibly from
    several threads. Each result (fresh or cached) then goes through
    :meth:`post_process`, which records diagnostics for the pass. Reports are
    flushed once per pass from :meth:`end_pass`.

    Args:
        input_tree: Directory handle the filter reads from.
        options: Filter options; unknown keys pass through to the engine.
        engine: Lint engine backend. Defaults to the ``scss-lint`` command.

    Raises:
        InvalidInputTreeError: If ``input_tree`` is not a usable directory.
        ConfigError: If an option is invalid, including an unknown
            ``testGenerator`` name.
    """

    annotation: Final[str] = "SCSS Linter"
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS

    def __init__(
        self,
        input_tree: InputTree | str | Any,
        options: Mapping[str, Any] | None = None,
        *,
        engine: LintEngine | None = None,
    ) -> None:
        self._input_tree = InputTree.coerce(input_tree)
        self._options = FilterOptions.from_mapping(options)
        self._generator: TestGenerator | None = None
        if self._options.test_generator is not None:
            self._generator = resolve_generator(self._options.test_generator)
        if engine is None:
            from .engines.scss_lint import ScssLintCommandEngine

            engine = ScssLintCommandEngine(cwd=self._input_tree.root)
        self._invoker = LintInvoker(engine)
        self._context = PassContext(self._resolve_config)

    @property
    def input_tree(self) -> InputTree:
        """Return the tree this filter reads from."""
        return self._input_tree

    @property
    def options(self) -> FilterOptions:
        """Return the validated filter options."""
        return self._options

    @property
    def engine(self) -> LintEngine:
        """Return the lint engine backend."""
        return self._invoker.engine

    @property
    def target_extension(self) -> str:
        """Return the suffix written for processed files."""

        if self._generator is not None:
            return TEST_TARGET_EXTENSION
        return DEFAULT_TARGET_EXTENSION

    def compute_destination_path(self, relative_path: str) -> str | None:
        """Return the output path for ``relative_path``.

        Ignored files and files without a lintable extension map to ``None``.
        """

        if self.should_ignore(relative_path):
            LOGGER.debug("ignoring %s", relative_path)
            return None
        return replace_extension(relative_path, self.extensions, self.target_extension)

    def should_ignore(self, relative_path: str) -> bool:
        """Return whether the configured ignore patterns exclude ``relative_path``."""

        patterns = self.resolve_effective_config().ignore_patterns
        if patterns is None:
            patterns = self._options.ignore_patterns
        return is_ignored(relative_path, patterns)

    def compute_cache_key(self, content: str, relative_path: str) -> str:
        """Return the digest under which the host caches this file's result."""

        resolved = self.resolve_effective_config()
        return build_key(content, relative_path, self._options.raw, resolved.key_payload())

    def transform(self, content: str, relative_path: str) -> FilterResult:
        """Lint one file and package the cacheable result.

        The output is the original content unless a test generator is
        configured, in which case it is the generated test source.
        """

        resolved = self.resolve_effective_config()
        report = self._invoker.lint(content, relative_path, self._options.raw, resolved)
        output = content
        if self._generator is not None:
            output = self._generator(relative_path, report.messages, report)
        return FilterResult(report=report, output=output)

    def post_process(self, result: FilterResult) -> ProcessedFile:
        """Record diagnostics for the pass and strip the report from ``result``."""

        if result.report.has_diagnostics:
            self._context.diagnostics.append(result.report)
        return ProcessedFile(output=result.output)

    def resolve_effective_config(self) -> ResolvedLintConfig:
        """Return the engine configuration for the current pass."""

        return self._context.resolved_config()

    def begin_pass(self) -> None:
        """Start a new pass with fresh diagnostics and configuration."""

        self._context = PassContext(self._resolve_config)
        LOGGER.debug("lint filter pass started for %s", self._input_tree.root)

    def end_pass(self) -> PassSummary:
        """Flush the pass's reports to the engine and return its totals."""

        context = self._context
        summary = context.diagnostics.summary()
        if summary.reports:
            self.engine.output_results(summary.reports, self._options.raw, context.resolved_config())
        LOGGER.debug(
            "lint filter pass finished: %d error(s), %d warning(s) in %d file(s)",
            summary.error_count,
            summary.warning_count,
            summary.reported_files,
        )
        return summary

    def enforce_policy(self, summary: PassSummary) -> None:
        """Raise when ``summary`` breaches the ``fail_on`` policy.

        Raises:
            LintThresholdExceeded: If the policy is exceeded.
        """

        policy = self._options.fail_on
        if policy.exceeded(summary.error_count, summary.warning_count):
            raise LintThresholdExceeded(summary, policy.value)

    def _resolve_config(self) -> ResolvedLintConfig:
        settings = self.engine.get_config(self._options.raw, self._options.config)
        resolved = ResolvedLintConfig(config_path=self._options.config, settings=settings)
        LOGGER.debug("resolved lint configuration: %s", sorted(resolved.settings))
        return resolved


__all__ = ["DEFAULT_TARGET_EXTENSION", "LintFilter", "SOURCE_EXTENSIONS", "TEST_TARGET_EXTENSION"]
