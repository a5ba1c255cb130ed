# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filter plugin shape expected by the host build pipeline."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintfilter.diagnostics import PassSummary
    from lintfilter.models import FilterResult, ProcessedFile
    from lintfilter.tree import InputTree


@runtime_checkable
class PersistentFilter(Protocol):
    """Per-file, persistent-cache capable transform stage.

    The per-file operations must be safe to call concurrently from the host
    scheduler; only :meth:`post_process` touches pass-scoped state.
    """

    extensions: tuple[str, ...]

    @property
    @abstractmethod
    def input_tree(self) -> InputTree:
        """Return the tree the filter reads from."""
        raise NotImplementedError

    @property
    @abstractmethod
    def target_extension(self) -> str:
        """Return the suffix written for processed files."""
        raise NotImplementedError

    @abstractmethod
    def compute_destination_path(self, relative_path: str) -> str | None:
        """Return the output path for ``relative_path`` or ``None`` to skip it."""
        raise NotImplementedError

    @abstractmethod
    def compute_cache_key(self, content: str, relative_path: str) -> str:
        """Return the persistent cache key for one file."""
        raise NotImplementedError

    @abstractmethod
    def transform(self, content: str, relative_path: str) -> FilterResult:
        """Process one file into its cacheable result."""
        raise NotImplementedError

    @abstractmethod
    def post_process(self, result: FilterResult) -> ProcessedFile:
        """Consume a cached or fresh result and return the emitted value."""
        raise NotImplementedError

    @abstractmethod
    def begin_pass(self) -> None:
        """Reset pass-scoped state before a build pass."""
        raise NotImplementedError

    @abstractmethod
    def end_pass(self) -> PassSummary:
        """Flush pass-scoped state after a build pass."""
        raise NotImplementedError

    @abstractmethod
    def enforce_policy(self, summary: PassSummary) -> None:
        """Raise when a finished pass breaches the escalation policy."""
        raise NotImplementedError


__all__ = ["PersistentFilter"]
