# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting configuration values into canonical JSON text."""

from __future__ import annotations

import inspect
import json
import textwrap
from collections.abc import Callable, Mapping, Sequence
from collections.abc import Set as AbstractSet
from enum import Enum
from functools import partial
from pathlib import PurePath
from types import CodeType
from typing import Any, TypeAlias

from pydantic import BaseModel

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


def callable_source(func: Callable[..., Any]) -> str:
    """Return a stable textual fingerprint describing ``func``'s behaviour.

    The dedented source text is preferred so that editing a callback's body
    changes the fingerprint. Builtins and callables created without a source
    file fall back to their qualified name plus the compiled code object.

    Args:
        func: Callable whose behaviour should be fingerprinted.

    Returns:
        str: Source text or code-based fallback for ``func``.
    """

    target = inspect.unwrap(func)
    try:
        return textwrap.dedent(inspect.getsource(target)).strip()
    except (OSError, TypeError):
        pass
    module = getattr(target, "__module__", None) or ""
    qualname = getattr(target, "__qualname__", None) or type(target).__qualname__
    code = getattr(target, "__code__", None)
    if isinstance(code, CodeType):
        return f"{module}.{qualname}:{_code_fingerprint(code)}"
    return f"{module}.{qualname}"


def _code_fingerprint(code: CodeType) -> str:
    constants = [
        _code_fingerprint(const) if isinstance(const, CodeType) else repr(const) for const in code.co_consts
    ]
    return f"{code.co_code.hex()}|{'|'.join(constants)}|{','.join(code.co_names)}"


def canonicalize(value: object) -> JsonValue:
    """Convert ``value`` into a JSON-compatible structure with stable ordering.

    Mapping keys are stringified and sets are sorted so that logically equal
    configurations produce identical output regardless of insertion order.

    Args:
        value: Configuration value to normalise.

    Returns:
        JsonValue: Representation that serializes deterministically.
    """

    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Enum):
        return canonicalize(value.value)
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, BaseModel):
        return canonicalize(value.model_dump(mode="python", by_alias=True))
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    if isinstance(value, partial):
        return {
            "__partial__": canonicalize(value.func),
            "args": canonicalize(value.args),
            "keywords": canonicalize(value.keywords),
        }
    if inspect.ismethod(value):
        return {"__callable__": callable_source(value.__func__), "bound": _object_state(value.__self__)}
    if callable(value) and not inspect.isroutine(value):
        return {"__callable__": callable_source(type(value)), "state": _object_state(value)}
    if callable(value):
        return {"__callable__": callable_source(value)}
    if isinstance(value, Mapping):
        return {str(key): canonicalize(item) for key, item in value.items()}
    if isinstance(value, AbstractSet):
        serialised = [canonicalize(item) for item in value]
        return sorted(serialised, key=lambda item: json.dumps(item, sort_keys=True))
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [canonicalize(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def _object_state(obj: object) -> JsonValue:
    """Return the class name and attribute values of ``obj``.

    Covers instance ``__dict__`` entries and ``__slots__`` declared anywhere
    in the class hierarchy.
    """

    if isinstance(obj, type):
        return canonicalize(obj)
    attributes: dict[str, object] = dict(getattr(obj, "__dict__", {}))
    for klass in type(obj).__mro__:
        slots = getattr(klass, "__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name in {"__dict__", "__weakref__"} or name in attributes:
                continue
            if hasattr(obj, name):
                attributes[name] = getattr(obj, name)
    owner = type(obj)
    return {"__type__": f"{owner.__module__}.{owner.__qualname__}", "attributes": canonicalize(attributes)}


def stable_dumps(value: object) -> str:
    """Return canonical JSON text for ``value`` with sorted keys."""

    return json.dumps(canonicalize(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


__all__ = ["JsonValue", "callable_source", "canonicalize", "stable_dumps"]
