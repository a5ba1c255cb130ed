# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pass-scoped aggregation of lint reports."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import TYPE_CHECKING

from .models import LintReport

if TYPE_CHECKING:
    from .config import ResolvedLintConfig


@dataclass(frozen=True, slots=True)
class PassSummary:
    """Totals collected over one build pass.

    Attributes:
        reports: Reports that carried at least one error or warning, in the
            order they were post-processed.
        error_count: Sum of ``error_count`` over ``reports``.
        warning_count: Sum of ``warning_count`` over ``reports``.
    """

    reports: tuple[LintReport, ...]
    error_count: int
    warning_count: int

    @property
    def reported_files(self) -> int:
        """Return the number of files that produced diagnostics."""
        return len(self.reports)

    @property
    def clean(self) -> bool:
        """Return ``True`` when no diagnostics were collected."""
        return not self.reports


class AggregatedDiagnostics:
    """Append-only collection of reports shared by concurrent file transforms."""

    def __init__(self) -> None:
        self._reports: list[LintReport] = []
        self._lock = Lock()

    def append(self, report: LintReport) -> None:
        """Record ``report`` atomically."""

        with self._lock:
            self._reports.append(report)

    def snapshot(self) -> tuple[LintReport, ...]:
        """Return the reports recorded so far."""

        with self._lock:
            return tuple(self._reports)

    def summary(self) -> PassSummary:
        """Return totals for the reports recorded so far."""

        reports = self.snapshot()
        return PassSummary(
            reports=reports,
            error_count=sum(report.error_count for report in reports),
            warning_count=sum(report.warning_count for report in reports),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)


class PassContext:
    """State owned by a single build pass.

    Holds the diagnostics accumulator and the resolved lint configuration,
    computed once per pass.
    """

    def __init__(self, resolver: Callable[[], ResolvedLintConfig]) -> None:
        self._resolver = resolver
        self._resolved: ResolvedLintConfig | None = None
        self._lock = Lock()
        self.diagnostics = AggregatedDiagnostics()

    def resolved_config(self) -> ResolvedLintConfig:
        """Return the pass's resolved configuration, computing it once."""

        with self._lock:
            if self._resolved is None:
                self._resolved = self._resolver()
            return self._resolved


__all__ = ["AggregatedDiagnostics", "PassContext", "PassSummary"]
