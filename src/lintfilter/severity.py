# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different lint engine vocabularies."""

    ERROR = "error"
    WARNING = "warning"


_NUMERIC_SEVERITY: Final[dict[int, Severity]] = {
    1: Severity.WARNING,
    2: Severity.ERROR,
}

_TOKEN_SEVERITY: Final[dict[str, Severity]] = {
    "e": Severity.ERROR,
    "error": Severity.ERROR,
    "w": Severity.WARNING,
    "warn": Severity.WARNING,
    "warning": Severity.WARNING,
}


def severity_from_engine(value: object, default: Severity = Severity.WARNING) -> Severity:
    """Map an engine specific severity marker onto :class:`Severity`.

    sass-lint reports numeric levels (``1`` warning, ``2`` error) while the
    scss-lint command line prints ``[W]``/``[E]`` markers.

    Args:
        value: Raw severity value supplied by the engine.
        default: Severity used when ``value`` is not recognised.

    Returns:
        Severity: Normalised severity level.
    """

    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return _NUMERIC_SEVERITY.get(value, Severity.ERROR if value > 2 else default)
    if isinstance(value, str):
        token = value.strip().strip("[]").lower()
        if token.isdigit():
            return severity_from_engine(int(token), default)
        return _TOKEN_SEVERITY.get(token, default)
    return default


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
    }.get(severity, "yellow")


__all__ = ["Severity", "severity_color", "severity_from_engine"]
