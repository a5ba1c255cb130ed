# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render aggregated diagnostics to the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from rich.text import Text

from ..console import detect_tty, get_console_manager
from ..logging import fail, section, warn
from ..models import LintReport, Message
from ..severity import severity_color

SOURCE_LABEL: Final[str] = "[sass-lint]"
LOCATION_SEPARATOR: Final[str] = ":"
_SEVERITY_WIDTH: Final[int] = 7


def raw_location(message: Message) -> str:
    """Return ``line:column`` for ``message``."""

    return f"{message.line}{LOCATION_SEPARATOR}{message.column}"


def format_message_line(message: Message, location_width: int = 0) -> str:
    """Return one indented diagnostic line.

    Args:
        message: Diagnostic to render.
        location_width: Column width used to align locations.

    Returns:
        str: Rendered line such as ``  error   3:5 Message text [rule]``.
    """

    return _message_text(message, location_width, color=False).plain


def _message_text(message: Message, location_width: int, *, color: bool) -> Text:
    severity_style = severity_color(message.severity) if color else ""
    code_display = f" [{message.rule_id}]" if message.rule_id else ""
    return Text.assemble(
        "  ",
        (message.severity.value.ljust(_SEVERITY_WIDTH), severity_style),
        " ",
        raw_location(message).ljust(location_width),
        " ",
        message.message,
        (code_display, "dim" if color else ""),
    )


class ConsoleReporter:
    """Print grouped diagnostics and a one-line summary."""

    def __init__(self, *, color: bool | None = None, use_emoji: bool = False) -> None:
        self._color = detect_tty() if color is None else color
        self._emoji = use_emoji

    def emit(self, reports: Sequence[LintReport]) -> None:
        """Print ``reports`` grouped by file."""

        if not reports:
            return
        console = get_console_manager().get(color=self._color, emoji=self._emoji)
        section("SCSS Lint", use_color=self._color)
        for report in reports:
            console.print(Text.assemble(SOURCE_LABEL, " ", (report.file_path, "bold" if self._color else "")))
            width = max((len(raw_location(message)) for message in report.messages), default=0)
            for message in report.messages:
                console.print(_message_text(message, width, color=self._color))
        errors = sum(report.error_count for report in reports)
        warnings = sum(report.warning_count for report in reports)
        summary = f"{errors} error(s), {warnings} warning(s) in {len(reports)} file(s)"
        if errors:
            fail(summary, use_emoji=self._emoji, use_color=self._color)
        else:
            warn(summary, use_emoji=self._emoji, use_color=self._color)


__all__ = ["ConsoleReporter", "format_message_line", "raw_location"]
