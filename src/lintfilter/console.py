# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared rich consoles for reporter output."""

from __future__ import annotations

import sys
from functools import lru_cache
from threading import Lock

from rich.console import Console


def detect_tty() -> bool:
    """Return whether stdout is attached to a terminal."""

    stream = sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


class RichConsoleManager:
    """Hand out one :class:`Console` per colour, emoji and terminal combination."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool, bool], Console] = {}
        self._lock = Lock()

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for the requested output flavour.

        Colour is only emitted when stdout is a terminal, so reports piped to
        a file stay plain text.

        Args:
            color: Whether styles may be rendered.
            emoji: Whether emoji shortcodes are rendered.

        Returns:
            Console: Console shared by every caller asking for the same flavour.
        """

        interactive = detect_tty()
        styled = color and interactive
        with self._lock:
            console = self._consoles.get((color, emoji, interactive))
            if console is None:
                console = Console(
                    color_system="auto" if styled else None,
                    force_terminal=interactive,
                    no_color=not styled,
                    emoji=emoji,
                    soft_wrap=True,
                )
                self._consoles[(color, emoji, interactive)] = console
            return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the manager shared by the whole process."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
