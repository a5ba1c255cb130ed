# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Contract implemented by lint engine backends."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintfilter.config import ResolvedLintConfig
    from lintfilter.models import LintReport, LintSource


@runtime_checkable
class LintEngine(Protocol):
    """Define the operations the filter needs from an external lint engine.

    Implementations may lint in-process or shell out to a linter binary. Any
    exception raised by :meth:`lint_text` propagates to the host unchanged.
    """

    @abstractmethod
    def lint_text(
        self,
        source: LintSource,
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> LintReport | Mapping[str, Any]:
        """Lint ``source`` and return the engine's report.

        Args:
            source: Text, format hint and filename of the file to lint.
            options: Raw filter options supplied at construction.
            config: Configuration resolved for the current pass.

        Returns:
            LintReport | Mapping[str, Any]: Report in normalized or
            sass-lint-compatible mapping form.
        """
        raise NotImplementedError

    @abstractmethod
    def get_config(self, options: Mapping[str, Any], config_path: Path | None) -> Mapping[str, Any]:
        """Return the engine configuration merged with ``options``.

        Args:
            options: Raw filter options supplied at construction.
            config_path: Optional rule-config file named by the ``config`` option.

        Returns:
            Mapping[str, Any]: Effective engine configuration.
        """
        raise NotImplementedError

    @abstractmethod
    def output_results(
        self,
        reports: Sequence[LintReport],
        options: Mapping[str, Any],
        config: ResolvedLintConfig,
    ) -> None:
        """Print or write ``reports`` using the engine's own formatting.

        Args:
            reports: Reports that carried errors or warnings during the pass.
            options: Raw filter options supplied at construction.
            config: Configuration resolved for the current pass.
        """
        raise NotImplementedError


__all__ = ["LintEngine"]
