# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental, cache-aware SCSS lint filter for tree-based build pipelines."""

from __future__ import annotations

from importlib import metadata

from .config import FilterOptions
from .errors import ConfigError, InvalidInputTreeError, LintThresholdExceeded
from .filter import LintFilter
from .models import FilterResult, LintReport, Message, ProcessedFile
from .pipeline import BuildPipeline, BuildSummary
from .test_generators import StubStyle
from .tree import InputTree

__all__ = [
    "BuildPipeline",
    "BuildSummary",
    "ConfigError",
    "FilterOptions",
    "FilterResult",
    "InputTree",
    "InvalidInputTreeError",
    "LintFilter",
    "LintReport",
    "LintThresholdExceeded",
    "Message",
    "ProcessedFile",
    "StubStyle",
    "__version__",
]

try:
    __version__ = metadata.version("lintfilter")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
