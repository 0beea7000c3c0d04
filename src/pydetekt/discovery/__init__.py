# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Upward file discovery and trigger selection helpers."""

from __future__ import annotations

from .locator import ConfigLocator, find_upward
from .patterns import matches_trigger_pattern, select_targets

__all__ = ["ConfigLocator", "find_upward", "matches_trigger_pattern", "select_targets"]
