# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine backends."""

from __future__ import annotations

from .scss_lint import ScssLintCommandEngine, build_command, parse_scss_lint_output

__all__ = ["ScssLintCommandEngine", "build_command", "parse_scss_lint_output"]
