# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Cache key derivation and the stores the host keeps lint results in."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

from ..interfaces.cache import CacheProvider
from .keys import build_key
from .providers import DirectoryCacheProvider, InMemoryCacheProvider

StoreKind = Literal["memory", "directory"]
CACHE_ENV_VAR: Final[str] = "LINTFILTER_CACHE_PROVIDER"


@dataclass(frozen=True, slots=True)
class CacheProviderSettings:
    """Selects the store used for per-file lint results.

    Attributes:
        kind: ``"memory"`` lives as long as the process; ``"directory"``
            survives restarts.
        directory: Root of the on-disk store for the ``"directory"`` kind.
    """

    kind: StoreKind = "memory"
    directory: Path | None = None

    @classmethod
    def parse(cls, value: str) -> CacheProviderSettings:
        """Parse ``memory`` or ``directory:<path>``.

        Raises:
            ValueError: On an unknown kind or a directory store without a path.
        """

        kind, _, location = value.partition(":")
        kind = kind.strip().lower()
        location = location.strip()
        if kind == "memory":
            return cls()
        if kind != "directory":
            raise ValueError(f"{CACHE_ENV_VAR} names an unknown cache store: {value!r}")
        if not location:
            raise ValueError(f"{CACHE_ENV_VAR}=directory needs a path, e.g. directory:.lintfilter-cache")
        return cls(kind="directory", directory=Path(location).expanduser())


def resolve_cache_provider_settings(
    settings: CacheProviderSettings | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> CacheProviderSettings:
    """Return ``settings`` when given, else what the environment asks for.

    Raises:
        ValueError: If ``LINTFILTER_CACHE_PROVIDER`` holds an invalid value.
    """

    if settings is not None:
        return settings
    value = (os.environ if env is None else env).get(CACHE_ENV_VAR, "")
    return CacheProviderSettings.parse(value) if value else CacheProviderSettings()


def create_cache_provider(
    settings: CacheProviderSettings | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> CacheProvider[Any]:
    """Instantiate the store described by ``settings`` or the environment."""

    resolved = resolve_cache_provider_settings(settings, env=env)
    if resolved.kind == "directory":
        if resolved.directory is None:
            raise ValueError("a directory cache store needs CacheProviderSettings.directory")
        return DirectoryCacheProvider(resolved.directory)
    return InMemoryCacheProvider()


__all__ = [
    "CACHE_ENV_VAR",
    "CacheProviderSettings",
    "DirectoryCacheProvider",
    "InMemoryCacheProvider",
    "build_key",
    "create_cache_provider",
    "resolve_cache_provider_settings",
]
