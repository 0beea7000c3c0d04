# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising SARIF result levels."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    NONE = "none"


_SARIF_LEVEL_TO_SEVERITY: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "note": Severity.NOTE,
    "none": Severity.NONE,
}


def severity_from_sarif(level: str | None) -> Severity:
    """Map a SARIF ``level`` string onto :class:`Severity`.

    SARIF treats an absent level as ``warning``; unknown values fall back to the
    same default.

    Args:
        level: Raw ``level`` value taken from a SARIF result.

    Returns:
        Severity: Normalised severity value.
    """

    if level is None:
        return Severity.WARNING
    return _SARIF_LEVEL_TO_SEVERITY.get(level.lower(), Severity.WARNING)


__all__ = ["Severity", "severity_from_sarif"]
