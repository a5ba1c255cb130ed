# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Input tree handle and the host's extension-based path rule."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .errors import InvalidInputTreeError


@dataclass(frozen=True, slots=True)
class InputTree:
    """Directory whose files feed one filter stage."""

    root: Path

    @classmethod
    def coerce(cls, value: object) -> InputTree:
        """Return ``value`` as an :class:`InputTree`.

        Raises:
            InvalidInputTreeError: If ``value`` is not a tree, path or string
            naming an existing directory.
        """

        if isinstance(value, InputTree):
            tree = value
        elif isinstance(value, (str, os.PathLike)):
            tree = cls(Path(value))
        else:
            raise InvalidInputTreeError(f"Invalid input tree: {value!r}")
        if not tree.root.is_dir():
            raise InvalidInputTreeError(f"Input tree {tree.root} is not a directory")
        return tree

    def iter_files(self) -> Iterator[str]:
        """Yield ``/`` separated paths of every file under the root, sorted."""

        paths = sorted(path.relative_to(self.root).as_posix() for path in self.root.rglob("*") if path.is_file())
        yield from paths

    def read_text(self, relative_path: str) -> str:
        """Return the UTF-8 content of ``relative_path``."""

        return (self.root / relative_path).read_text(encoding="utf-8")


def replace_extension(relative_path: str, extensions: Iterable[str], target_extension: str) -> str | None:
    """Apply the host's standard destination rule.

    Returns ``relative_path`` with a matching source extension swapped for
    ``target_extension``, or ``None`` when no extension matches.
    """

    name = PurePosixPath(relative_path).name
    for extension in extensions:
        suffix = f".{extension}"
        if name.endswith(suffix) and len(name) > len(suffix):
            return f"{relative_path[: -len(suffix)]}.{target_extension}"
    return None


__all__ = ["InputTree", "replace_extension"]
