# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings models and loaders for pydetekt."""

from __future__ import annotations

from .loader import PROJECT_SETTINGS_FILENAME, SettingsLoadResult, load_settings
from .models import (
    DEFAULT_CONFIG_NAMES,
    DEFAULT_EXECUTABLE,
    DEFAULT_FILE_PATTERNS,
    DetektSettings,
    NotifyLevel,
    merge_settings,
)

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "DEFAULT_EXECUTABLE",
    "DEFAULT_FILE_PATTERNS",
    "DetektSettings",
    "NotifyLevel",
    "PROJECT_SETTINGS_FILENAME",
    "SettingsLoadResult",
    "load_settings",
    "merge_settings",
]
