# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache key derivation for per-file lint results."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Final

from ..serialization import stable_dumps

KEY_DELIMITER: Final[bytes] = b"\0"
_HASH_ENCODING: Final[str] = "utf-8"


def build_key(
    content: str,
    relative_path: str,
    raw_config: Mapping[str, object],
    resolved_config: object,
) -> str:
    """Return the digest identifying a file's lint result.

    The digest covers the file content, its relative path, the raw filter
    options (callables contribute their source text) and the engine's
    resolved configuration, so a change to any of them yields a new key.

    Args:
        content: File content as read by the host.
        relative_path: Path of the file relative to the input tree.
        raw_config: Options supplied when the filter was constructed.
        resolved_config: Configuration resolved by the lint engine.

    Returns:
        str: 128-bit hexadecimal digest.
    """

    hasher = hashlib.md5(usedforsecurity=False)
    parts = (content, relative_path, stable_dumps(raw_config), stable_dumps(resolved_config))
    for index, part in enumerate(parts):
        if index:
            hasher.update(KEY_DELIMITER)
        hasher.update(part.encode(_HASH_ENCODING, errors="surrogatepass"))
    return hasher.hexdigest()


__all__ = ["KEY_DELIMITER", "build_key"]
