# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintfilter package."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .severity import Severity, severity_from_engine


class Message(BaseModel):
    """Single diagnostic emitted by the lint engine for one file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    line: int = 0
    column: int = 0
    rule_id: str = Field(default="", alias="ruleId")
    severity: Severity = Severity.WARNING
    message: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> Severity:
        return severity_from_engine(value)

    @field_validator("line", "column", mode="before")
    @classmethod
    def _coerce_position(cls, value: object) -> int:
        if value is None:
            return 0
        if isinstance(value, (int, str)):
            try:
                return int(value)
            except ValueError:
                return 0
        return 0

    @field_validator("rule_id", mode="before")
    @classmethod
    def _coerce_rule(cls, value: object) -> str:
        return "" if value is None else str(value)


class LintReport(BaseModel):
    """Normalized outcome of linting one file.

    Counts missing from the engine payload are derived from ``messages`` so
    downstream consumers can rely on them being present.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_path: str = Field(default="", alias="filePath")
    messages: tuple[Message, ...] = Field(default_factory=tuple)
    error_count: int = Field(default=0, alias="errorCount")
    warning_count: int = Field(default=0, alias="warningCount")

    @model_validator(mode="before")
    @classmethod
    def _derive_counts(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        payload = dict(data)
        raw_messages = payload.get("messages") or ()
        payload["messages"] = raw_messages
        if "errorCount" not in payload and "error_count" not in payload:
            payload["error_count"] = sum(1 for item in raw_messages if _message_severity(item) is Severity.ERROR)
        if "warningCount" not in payload and "warning_count" not in payload:
            payload["warning_count"] = sum(1 for item in raw_messages if _message_severity(item) is Severity.WARNING)
        for key in ("errorCount", "error_count", "warningCount", "warning_count"):
            if key in payload and payload[key] is None:
                payload[key] = 0
        return payload

    @property
    def passed(self) -> bool:
        """Return ``True`` when the report carries no errors."""
        return not self.error_count

    @property
    def has_diagnostics(self) -> bool:
        """Return ``True`` when the report should be surfaced to the user."""
        return bool(self.error_count or self.warning_count)


def _message_severity(item: object) -> Severity | None:
    if isinstance(item, Message):
        return item.severity
    if isinstance(item, Mapping):
        return severity_from_engine(item.get("severity"))
    return None


class FilterResult(BaseModel):
    """Cacheable unit produced by transforming one file."""

    model_config = ConfigDict(frozen=True)

    report: LintReport
    output: str


class ProcessedFile(BaseModel):
    """Post-processed value that continues through the host pipeline."""

    model_config = ConfigDict(frozen=True)

    output: str


@dataclass(frozen=True, slots=True)
class LintSource:
    """Payload handed to the lint engine for a single file."""

    text: str
    format: str
    filename: str


@dataclass(frozen=True, slots=True)
class FileUnit:
    """One input file discovered by the host for the current pass."""

    relative_path: str
    content: str

    @property
    def extension(self) -> str:
        """Return the file suffix without the leading dot."""
        return file_format(self.relative_path)


def file_format(relative_path: str) -> str:
    """Return the format hint derived from ``relative_path``'s suffix."""

    return PurePosixPath(relative_path.replace("\\", "/")).suffix.removeprefix(".")


__all__ = [
    "FileUnit",
    "FilterResult",
    "LintReport",
    "LintSource",
    "Message",
    "ProcessedFile",
    "file_format",
]
