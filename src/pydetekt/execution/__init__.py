# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command resolution, caching and process execution for detekt."""

from __future__ import annotations

from .cache import CommandCache
from .command import CommandBuilder, allocate_scratch_path
from .process import INVALID_CONFIG_EXIT_CODE, ProcessRunner

__all__ = [
    "CommandBuilder",
    "CommandCache",
    "INVALID_CONFIG_EXIT_CODE",
    "ProcessRunner",
    "allocate_scratch_path",
]
