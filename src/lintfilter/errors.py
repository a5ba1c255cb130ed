# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised by the lint filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .diagnostics import PassSummary


class ConfigError(Exception):
    """Raised when filter configuration input is invalid."""


class InvalidInputTreeError(ConfigError):
    """Raised when the filter is constructed without a usable input tree."""


class LintThresholdExceeded(RuntimeError):
    """Raised when a finished pass breaches the configured escalation policy."""

    def __init__(self, summary: PassSummary, policy: str) -> None:
        super().__init__(
            f"Lint policy '{policy}' exceeded: {summary.error_count} error(s), "
            f"{summary.warning_count} warning(s) across {summary.reported_files} file(s)",
        )
        self.summary = summary
        self.policy = policy


__all__ = ["ConfigError", "InvalidInputTreeError", "LintThresholdExceeded"]
