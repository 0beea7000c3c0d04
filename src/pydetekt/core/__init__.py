# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models and helpers shared across pydetekt."""

from __future__ import annotations

from .models import (
    ConfigSearchResult,
    Diagnostic,
    ProcessOutcome,
    ResolvedInvocation,
    ResolveResult,
    RunResult,
    RunState,
    TargetIdentity,
)
from .severity import Severity, severity_from_sarif

__all__ = [
    "ConfigSearchResult",
    "Diagnostic",
    "ProcessOutcome",
    "ResolveResult",
    "ResolvedInvocation",
    "RunResult",
    "RunState",
    "Severity",
    "TargetIdentity",
    "severity_from_sarif",
]
