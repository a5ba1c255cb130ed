# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Stores for per-file lint results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Final, Generic, TypeVar

from ..interfaces.cache import CacheProvider
from ..serialization import JsonValue

ValueT = TypeVar("ValueT")

LOGGER = logging.getLogger(__name__)

_ENTRY_SUFFIX: Final[str] = ".json"
_SHARD_WIDTH: Final[int] = 2


class InMemoryCacheProvider(CacheProvider[ValueT], Generic[ValueT]):
    """Keep results in a dictionary for the lifetime of the process."""

    def __init__(self) -> None:
        self._entries: dict[str, ValueT] = {}
        self._lock = RLock()

    def get(self, key: str) -> ValueT | None:
        """Return the value stored under ``key``, if any."""

        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: ValueT) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

        with self._lock:
            self._entries[key] = value

    def delete(self, key: str) -> None:
        """Forget ``key``; unknown keys are ignored."""

        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Forget every stored value."""

        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class DirectoryCacheProvider(CacheProvider[JsonValue]):
    """Persist JSON values as ``<root>/<key[:2]>/<key>.json`` files.

    Writes go through a temporary file and an atomic rename. Unreadable or
    unwritable entries are logged and behave like misses.
    """

    def __init__(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        self._root = directory

    @property
    def directory(self) -> Path:
        """Return the store's root directory."""
        return self._root

    def get(self, key: str) -> JsonValue | None:
        """Return the decoded entry for ``key`` or ``None``."""

        entry = self._entry(key)
        try:
            text = entry.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            LOGGER.warning("cannot read cache entry %s: %s", entry, exc)
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning("discarding corrupt cache entry %s: %s", entry, exc)
            return None

    def set(self, key: str, value: JsonValue) -> None:
        """Write ``value`` for ``key``."""

        entry = self._entry(key)
        staging = entry.with_name(f"{entry.stem}.tmp")
        try:
            entry.parent.mkdir(exist_ok=True)
            staging.write_text(json.dumps(value, sort_keys=True), encoding="utf-8")
            staging.replace(entry)
        except OSError as exc:
            LOGGER.warning("cannot write cache entry %s: %s", entry, exc)

    def delete(self, key: str) -> None:
        """Remove the entry for ``key`` if present."""

        entry = self._entry(key)
        try:
            entry.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("cannot remove cache entry %s: %s", entry, exc)

    def clear(self) -> None:
        """Remove every entry below the root directory."""

        for entry in self._root.glob(f"*/*{_ENTRY_SUFFIX}"):
            try:
                entry.unlink(missing_ok=True)
            except OSError as exc:
                LOGGER.warning("cannot remove cache entry %s: %s", entry, exc)

    def _entry(self, key: str) -> Path:
        name = "".join(char for char in key if char.isalnum()) or "_"
        return self._root / name[:_SHARD_WIDTH] / f"{name}{_ENTRY_SUFFIX}"


__all__ = ["DirectoryCacheProvider", "InMemoryCacheProvider"]
