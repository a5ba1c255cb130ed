# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting sinks for aggregated lint diagnostics."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol

from ..config import FilterOptions
from ..models import LintReport
from .console import ConsoleReporter, format_message_line
from .json_report import JsonFileReporter, serialize_report, write_json_report


class Reporter(Protocol):
    """Sink receiving the reports aggregated over a build pass."""

    @abstractmethod
    def emit(self, reports: Sequence[LintReport]) -> None:
        """Display or persist ``reports``."""
        raise NotImplementedError


def build_reporter(options: FilterOptions) -> Reporter:
    """Return the sink selected by ``options.reporter``.

    Option validation guarantees ``report_out`` for the JSON sink.
    """

    if options.reporter == "json" and options.report_out is not None:
        return JsonFileReporter(options.report_out)
    return ConsoleReporter()


__all__ = [
    "ConsoleReporter",
    "JsonFileReporter",
    "Reporter",
    "build_reporter",
    "format_message_line",
    "serialize_report",
    "write_json_report",
]
