# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit machine-readable reports for a build pass."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from ..models import LintReport
from ..serialization import JsonValue


def serialize_report(report: LintReport) -> dict[str, JsonValue]:
    """Convert ``report`` into the sass-lint JSON shape."""

    return report.model_dump(mode="json", by_alias=True)


def write_json_report(reports: Sequence[LintReport], path: Path) -> None:
    """Write ``reports`` with pass totals to ``path``."""

    payload = {
        "errorCount": sum(report.error_count for report in reports),
        "warningCount": sum(report.warning_count for report in reports),
        "results": [serialize_report(report) for report in reports],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


class JsonFileReporter:
    """Persist aggregated reports as a JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return the destination file."""
        return self._path

    def emit(self, reports: Sequence[LintReport]) -> None:
        """Write ``reports`` to the configured path."""

        write_json_report(reports, self._path)


__all__ = ["JsonFileReporter", "serialize_report", "write_json_report"]
