# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Cache store contract used by the host pipeline."""

from __future__ import annotations

from abc import abstractmethod
from typing import Generic, Protocol, TypeVar

ValueT = TypeVar("ValueT")


class CacheProvider(Protocol, Generic[ValueT]):
    """Define the contract implemented by cache backends.

    The lint filter only supplies keys and values; eviction and storage are
    owned by the provider. Values persisted by long-lived providers must be
    JSON-serialisable so directory caches can round-trip them across
    process restarts.
    """

    @abstractmethod
    def get(self, key: str) -> ValueT | None:
        """Fetch the cached value associated with ``key`` when present.

        Args:
            key: Digest identifying the cached entry.

        Returns:
            ValueT | None: Cached value when present, otherwise ``None``.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: ValueT) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: Digest identifying the cached entry.
            value: Value to store under ``key``.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove any cached value associated with ``key``."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove all cached values managed by the provider."""
        raise NotImplementedError


__all__ = ["CacheProvider"]
