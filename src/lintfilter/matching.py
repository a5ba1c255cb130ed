# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Glob matching used to exclude files from linting."""

from __future__ import annotations

from collections.abc import Sequence
from fnmatch import fnmatchcase
from functools import lru_cache

_RECURSIVE_SEGMENT = "**"
_PATH_SEPARATOR = "/"


def is_ignored(relative_path: str, patterns: object) -> bool:
    """Return whether ``relative_path`` matches any configured ignore pattern.

    Args:
        relative_path: Path relative to the input tree, ``/`` separated.
        patterns: A glob string, a sequence of globs, or ``None``. Any other
            shape, including a sequence holding non-strings, is treated as
            "no ignore rule".

    Returns:
        bool: ``True`` on the first matching pattern.
    """

    if isinstance(patterns, str):
        return bool(patterns) and glob_match(relative_path, patterns)
    if not isinstance(patterns, Sequence) or isinstance(patterns, (bytes, bytearray)):
        return False
    if not all(isinstance(pattern, str) for pattern in patterns):
        return False
    return any(pattern and glob_match(relative_path, pattern) for pattern in patterns)


def glob_match(relative_path: str, pattern: str) -> bool:
    """Return whether ``relative_path`` matches the shell-style ``pattern``.

    ``*``, ``?`` and bracket classes stay within one path segment while
    ``**`` spans zero or more whole segments.
    """

    path_parts = _split(relative_path)
    pattern_parts = _split(pattern)
    return _match_segments(path_parts, pattern_parts)


@lru_cache(maxsize=1024)
def _split(raw: str) -> tuple[str, ...]:
    cleaned = raw.replace("\\", _PATH_SEPARATOR).strip()
    cleaned = cleaned.removeprefix("./")
    return tuple(segment for segment in cleaned.split(_PATH_SEPARATOR) if segment)


@lru_cache(maxsize=4096)
def _match_segments(parts: tuple[str, ...], pattern: tuple[str, ...]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == _RECURSIVE_SEGMENT:
        return any(_match_segments(parts[offset:], rest) for offset in range(len(parts) + 1))
    if not parts:
        return False
    if not fnmatchcase(parts[0], head):
        return False
    return _match_segments(parts[1:], rest)


__all__ = ["glob_match", "is_ignored"]
