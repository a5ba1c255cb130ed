# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Adapter between the filter and an external lint engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import ResolvedLintConfig
from .interfaces.engine import LintEngine
from .models import LintReport, LintSource, file_format

LOGGER = logging.getLogger(__name__)


class LintInvoker:
    """Lint single files through ``engine`` and normalize the report shape.

    Exceptions raised by the engine propagate unchanged.
    """

    def __init__(self, engine: LintEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> LintEngine:
        """Return the wrapped lint engine."""
        return self._engine

    def lint(
        self,
        content: str,
        relative_path: str,
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> LintReport:
        """Lint ``content`` as the file at ``relative_path``.

        Args:
            content: File content to lint.
            relative_path: Path of the file relative to the input tree.
            options: Raw filter options.
            config: Configuration resolved for the current pass.

        Returns:
            LintReport: Normalized report for the file.
        """

        source = LintSource(text=content, format=file_format(relative_path), filename=relative_path)
        raw_report = self._engine.lint_text(source, options, config)
        report = normalize_report(raw_report, relative_path)
        LOGGER.debug(
            "linted %s: %d error(s), %d warning(s)",
            relative_path,
            report.error_count,
            report.warning_count,
        )
        return report


def normalize_report(raw_report: LintReport | Mapping[str, Any], relative_path: str) -> LintReport:
    """Return ``raw_report`` as a :class:`LintReport`.

    Mapping payloads follow the sass-lint report shape. A missing file path
    falls back to ``relative_path``.

    Raises:
        TypeError: If the engine returned neither a report nor a mapping.
    """

    if isinstance(raw_report, LintReport):
        report = raw_report
    elif isinstance(raw_report, Mapping):
        report = LintReport.model_validate(dict(raw_report))
    else:
        raise TypeError(f"Lint engine returned unsupported report type {type(raw_report).__name__}")
    if not report.file_path:
        report = report.model_copy(update={"file_path": relative_path})
    return report


__all__ = ["LintInvoker", "normalize_report"]
