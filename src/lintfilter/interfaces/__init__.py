# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the collaborators the lint filter talks to."""

from __future__ import annotations

from .cache import CacheProvider
from .engine import LintEngine
from .host import PersistentFilter

__all__ = ["CacheProvider", "LintEngine", "PersistentFilter"]
