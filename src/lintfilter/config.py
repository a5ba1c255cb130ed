# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the lint filter."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .test_generators import StubStyle, resolve_generator

# Option names understood by the filter itself, including camelCase spellings
# carried over from JavaScript build configurations.
_KNOWN_OPTIONS: Final[dict[str, str]] = {
    "config": "config",
    "testGenerator": "test_generator",
    "test_generator": "test_generator",
    "reporter": "reporter",
    "reportOut": "report_out",
    "report_out": "report_out",
    "failOn": "fail_on",
    "fail_on": "fail_on",
    "bundleExec": "bundle_exec",
    "bundle_exec": "bundle_exec",
}
FILTER_OPTION_NAMES: Final[frozenset[str]] = frozenset(_KNOWN_OPTIONS)
IGNORE_SECTION: Final[str] = "files"
IGNORE_KEY: Final[str] = "ignore"


class FailOn(str, Enum):
    """Escalation policy applied to a finished build pass."""

    NEVER = "never"
    ERROR = "error"
    WARNING = "warning"

    def exceeded(self, error_count: int, warning_count: int) -> bool:
        """Return whether the counts breach this policy."""

        if self is FailOn.ERROR:
            return error_count > 0
        if self is FailOn.WARNING:
            return (error_count + warning_count) > 0
        return False


class FilterOptions(BaseModel):
    """Validated view of the options mapping handed to the filter.

    Known options become typed fields; everything else is kept in
    ``passthrough`` for the lint engine. ``raw`` preserves the original mapping
    read-only, including callables, for cache keys and engine calls.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    config: Path | None = None
    test_generator: StubStyle | None = None
    reporter: Literal["console", "json"] = "console"
    report_out: Path | None = None
    fail_on: FailOn = FailOn.NEVER
    bundle_exec: bool = False
    passthrough: Mapping[str, Any] = Field(default_factory=dict)
    raw: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("passthrough", "raw", mode="after")
    @classmethod
    def _freeze_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _require_report_destination(self) -> FilterOptions:
        if self.reporter == "json" and self.report_out is None:
            raise ValueError("the json reporter requires the 'reportOut' option")
        return self

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> FilterOptions:
        """Build options from a user supplied mapping.

        Args:
            options: Mapping of option names to values, or ``None``.

        Returns:
            FilterOptions: Validated, immutable options.

        Raises:
            ConfigError: If ``options`` is not a mapping or a known option
            holds an invalid value.
        """

        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ConfigError(f"Filter options must be a mapping, got {type(options).__name__}")
        known: dict[str, Any] = {}
        passthrough: dict[str, Any] = {}
        for key, value in options.items():
            field_name = _KNOWN_OPTIONS.get(str(key))
            if field_name is None:
                passthrough[str(key)] = value
            elif value is not None:
                known[field_name] = value
        if "test_generator" in known:
            resolve_generator(known["test_generator"])
        try:
            model = cls.model_validate(
                {**known, "passthrough": passthrough, "raw": dict(options)},
            )
        except ValidationError as exc:
            raise ConfigError(_describe_validation_error(exc)) from exc
        return model

    @property
    def ignore_patterns(self) -> object:
        """Return the raw ``files.ignore`` value from the options."""

        return ignore_patterns_from(self.raw)


def ignore_patterns_from(settings: Mapping[str, Any]) -> object:
    """Return ``settings['files']['ignore']`` or ``None`` when absent or malformed."""

    section = settings.get(IGNORE_SECTION)
    if not isinstance(section, Mapping):
        return None
    return section.get(IGNORE_KEY)


class ResolvedLintConfig(BaseModel):
    """Configuration the lint engine resolved for the current pass."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    config_path: Path | None = None
    settings: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("settings", mode="after")
    @classmethod
    def _freeze_settings(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def key_payload(self) -> dict[str, Any]:
        """Return the values that participate in cache keys."""

        return {"config_path": self.config_path, "settings": self.settings}

    @property
    def ignore_patterns(self) -> object:
        """Return the effective ``files.ignore`` value."""

        return ignore_patterns_from(self.settings)


def _describe_validation_error(exc: ValidationError) -> str:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "options"
        details.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Invalid lint filter options: " + "; ".join(details)


__all__ = [
    "FILTER_OPTION_NAMES",
    "FailOn",
    "FilterOptions",
    "IGNORE_KEY",
    "IGNORE_SECTION",
    "ResolvedLintConfig",
    "ignore_patterns_from",
]
