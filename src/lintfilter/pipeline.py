# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reference host that drives a persistent filter over an input tree.

The host owns everything the filter deliberately does not: walking the tree,
consulting and filling the cache store, scheduling files on worker threads
and writing emitted files. It performs no file watching or tree diffing;
each call to :meth:`BuildPipeline.build` is one full pass.
"""

from __future__ import annotations

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .cache.providers import InMemoryCacheProvider
from .diagnostics import PassSummary
from .interfaces.cache import CacheProvider
from .interfaces.host import PersistentFilter
from .models import FileUnit, FilterResult
from .tree import InputTree

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of pushing one file through the filter."""

    relative_path: str
    destination: str
    cache_hit: bool


@dataclass(frozen=True, slots=True)
class BuildSummary:
    """Totals for one build pass."""

    outcomes: tuple[FileOutcome, ...]
    skipped: tuple[str, ...]
    diagnostics: PassSummary

    @property
    def emitted(self) -> tuple[str, ...]:
        """Return destination paths written during the pass."""
        return tuple(outcome.destination for outcome in self.outcomes)

    @property
    def cache_hits(self) -> int:
        """Return how many files reused a cached result."""
        return sum(1 for outcome in self.outcomes if outcome.cache_hit)

    @property
    def cache_misses(self) -> int:
        """Return how many files were transformed afresh."""
        return sum(1 for outcome in self.outcomes if not outcome.cache_hit)


class BuildPipeline:
    """Run ``plugin`` over its input tree and write the results to ``output_dir``.

    Args:
        plugin: Filter stage to drive.
        output_dir: Directory receiving emitted files; recreated every pass.
        cache: Store for transformed results, shared across passes.
        jobs: Number of worker threads used for per-file work.
        enforce_policy: Whether to apply the plugin's escalation policy after
            each pass.

    Raises:
        ValueError: If ``jobs`` is below one or ``output_dir`` overlaps the
            input tree.
    """

    def __init__(
        self,
        plugin: PersistentFilter,
        output_dir: Path,
        *,
        cache: CacheProvider[Any] | None = None,
        jobs: int = 1,
        enforce_policy: bool = True,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        _ensure_disjoint(plugin.input_tree.root, output_dir)
        self._plugin = plugin
        self._output_dir = output_dir
        self._cache: CacheProvider[Any] = cache if cache is not None else InMemoryCacheProvider()
        self._jobs = jobs
        self._enforce_policy = enforce_policy

    @property
    def cache(self) -> CacheProvider[Any]:
        """Return the cache store used across passes."""
        return self._cache

    def build(self) -> BuildSummary:
        """Run one full pass.

        Returns:
            BuildSummary: Per-file outcomes and the pass diagnostics.

        Raises:
            Exception: Whatever the filter raises for a file propagates after
            the pass diagnostics are flushed.
        """

        plugin = self._plugin
        tree: InputTree = plugin.input_tree
        self._reset_output()
        plugin.begin_pass()

        planned: list[tuple[str, str]] = []
        skipped: list[str] = []
        for relative_path in tree.iter_files():
            destination = plugin.compute_destination_path(relative_path)
            if destination is None:
                skipped.append(relative_path)
            else:
                planned.append((relative_path, destination))

        try:
            if self._jobs == 1:
                outcomes = [self._process(tree, relative_path, destination) for relative_path, destination in planned]
            else:
                with ThreadPoolExecutor(max_workers=self._jobs) as executor:
                    futures = [
                        executor.submit(self._process, tree, relative_path, destination)
                        for relative_path, destination in planned
                    ]
                    outcomes = [future.result() for future in futures]
        finally:
            diagnostics = plugin.end_pass()

        summary = BuildSummary(outcomes=tuple(outcomes), skipped=tuple(skipped), diagnostics=diagnostics)
        LOGGER.info(
            "build pass emitted %d file(s) (%d cached), skipped %d",
            len(summary.outcomes),
            summary.cache_hits,
            len(summary.skipped),
        )
        if self._enforce_policy:
            plugin.enforce_policy(diagnostics)
        return summary

    def _process(self, tree: InputTree, relative_path: str, destination: str) -> FileOutcome:
        plugin = self._plugin
        unit = FileUnit(relative_path=relative_path, content=tree.read_text(relative_path))
        key = plugin.compute_cache_key(unit.content, unit.relative_path)
        result = self._load_cached(key)
        cache_hit = result is not None
        LOGGER.debug("cache %s for %s (%s)", "hit" if cache_hit else "miss", unit.relative_path, key)
        if result is None:
            result = plugin.transform(unit.content, unit.relative_path)
            self._cache.set(key, result.model_dump(mode="json", by_alias=True))
        processed = plugin.post_process(result)
        target = self._output_dir / destination
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(processed.output, encoding="utf-8")
        return FileOutcome(relative_path=relative_path, destination=destination, cache_hit=cache_hit)

    def _load_cached(self, key: str) -> FilterResult | None:
        payload = self._cache.get(key)
        if payload is None:
            return None
        try:
            return FilterResult.model_validate(payload)
        except ValidationError as exc:
            LOGGER.warning("discarding malformed cache entry %s: %s", key, exc)
            self._cache.delete(key)
            return None

    def _reset_output(self) -> None:
        if self._output_dir.exists():
            shutil.rmtree(self._output_dir)
        self._output_dir.mkdir(parents=True)


def _ensure_disjoint(input_root: Path, output_dir: Path) -> None:
    """Reject an output directory that overlaps the input tree.

    The output directory is deleted at the start of every pass.

    Raises:
        ValueError: If either directory equals or contains the other.
    """

    source = input_root.resolve()
    target = output_dir.resolve()
    if target.is_relative_to(source) or source.is_relative_to(target):
        raise ValueError(f"output directory {output_dir} overlaps the input tree {input_root}")


__all__ = ["BuildPipeline", "BuildSummary", "FileOutcome", "InputTree"]
