# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for cache key derivation and canonical serialization."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from functools import partial
from pathlib import Path

from lintfilter.cache.keys import build_key
from lintfilter.serialization import callable_source, canonicalize, stable_dumps

CONTENT = "a {\n  color: red;\n}\n"
RESOLVED = {"config_path": None, "settings": {"rules": {"no-color-literals": 2}}}


def upper_formatter(value: str) -> str:
    return value.upper()


def lower_formatter(value: str) -> str:
    return value.lower()


def _formatter_factory() -> Callable[[str], str]:
    return lambda value: value.strip()


def _prefix(prefix: str, value: str) -> str:
    return prefix + value


class PrefixFormatter:
    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def __call__(self, value: str) -> str:
        return self.prefix + value


class SuffixFormatter:
    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def __call__(self, value: str) -> str:
        return value + self.prefix


class SlottedFormatter:
    __slots__ = ("width",)

    def __init__(self, width: int) -> None:
        self.width = width

    def __call__(self, value: str) -> str:
        return value.ljust(self.width)

    def pad(self, value: str) -> str:
        return value.rjust(self.width)


class Flavour(Enum):
    PLAIN = "plain"


def test_build_key_is_deterministic_hex_digest() -> None:
    first = build_key(CONTENT, "a.scss", {"verbose": True}, RESOLVED)
    second = build_key(CONTENT, "a.scss", {"verbose": True}, RESOLVED)

    assert first == second
    assert len(first) == 32
    int(first, 16)


def test_build_key_ignores_mapping_order() -> None:
    left = build_key(CONTENT, "a.scss", {"a": 1, "b": {"x": 1, "y": 2}}, RESOLVED)
    right = build_key(CONTENT, "a.scss", {"b": {"y": 2, "x": 1}, "a": 1}, RESOLVED)

    assert left == right


def test_build_key_changes_with_each_input() -> None:
    baseline = build_key(CONTENT, "a.scss", {"verbose": True}, RESOLVED)
    other_rules = {"config_path": None, "settings": {"rules": {"no-color-literals": 1}}}

    assert build_key(CONTENT + " ", "a.scss", {"verbose": True}, RESOLVED) != baseline
    assert build_key(CONTENT, "b.scss", {"verbose": True}, RESOLVED) != baseline
    assert build_key(CONTENT, "a.scss", {"verbose": False}, RESOLVED) != baseline
    assert build_key(CONTENT, "a.scss", {"verbose": True}, other_rules) != baseline


def test_parts_do_not_bleed_into_each_other() -> None:
    assert build_key("ab", "c.scss", {}, {}) != build_key("a", "bc.scss", {}, {})


def test_function_options_hash_by_source_text() -> None:
    upper = build_key(CONTENT, "a.scss", {"formatter": upper_formatter}, RESOLVED)
    lower = build_key(CONTENT, "a.scss", {"formatter": lower_formatter}, RESOLVED)

    assert upper != lower
    assert upper == build_key(CONTENT, "a.scss", {"formatter": upper_formatter}, RESOLVED)


def test_distinct_function_objects_with_same_source_share_a_key() -> None:
    first, second = _formatter_factory(), _formatter_factory()

    assert first is not second
    assert build_key(CONTENT, "a.scss", {"formatter": first}, RESOLVED) == build_key(
        CONTENT,
        "a.scss",
        {"formatter": second},
        RESOLVED,
    )


def test_callable_source_prefers_dedented_source() -> None:
    source = callable_source(upper_formatter)

    assert source.startswith("def upper_formatter(value: str) -> str:")
    assert "value.upper()" in source


def test_callable_source_falls_back_for_builtins() -> None:
    assert callable_source(len) == "builtins.len"


def test_canonicalize_normalises_values() -> None:
    payload = canonicalize(
        {
            1: Flavour.PLAIN,
            "path": Path("styles") / "main.scss",
            "tags": {"b", "a"},
            "pair": ("x", 2),
            "blob": b"\x00\xff",
        },
    )

    assert payload == {
        "1": "plain",
        "path": "styles/main.scss",
        "tags": ["a", "b"],
        "pair": ["x", 2],
        "blob": "00ff",
    }


def test_stable_dumps_is_compact_and_sorted() -> None:
    assert stable_dumps({"b": 1, "a": [True, None]}) == '{"a":[true,null],"b":1}'


def _key_for(formatter: object) -> str:
    return build_key(CONTENT, "a.scss", {"formatter": formatter}, RESOLVED)


def test_partial_options_hash_their_bound_arguments() -> None:
    assert _key_for(partial(_prefix, "x")) != _key_for(partial(_prefix, "y"))
    assert _key_for(partial(_prefix, prefix="x")) != _key_for(partial(_prefix, prefix="y"))
    assert _key_for(partial(_prefix, "x")) == _key_for(partial(_prefix, "x"))
    assert _key_for(partial(_prefix, "x")) != _key_for(partial(upper_formatter))


def test_callable_instances_hash_their_state_and_call_logic() -> None:
    assert _key_for(PrefixFormatter("x")) != _key_for(PrefixFormatter("y"))
    assert _key_for(PrefixFormatter("x")) == _key_for(PrefixFormatter("x"))
    assert _key_for(PrefixFormatter("x")) != _key_for(SuffixFormatter("x"))
    assert _key_for(SlottedFormatter(4)) != _key_for(SlottedFormatter(8))


def test_bound_methods_hash_their_instance_state() -> None:
    assert _key_for(SlottedFormatter(4).pad) != _key_for(SlottedFormatter(8).pad)
    assert _key_for(SlottedFormatter(4).pad) == _key_for(SlottedFormatter(4).pad)
