# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run orchestration wiring resolution, execution and parsing."""

from __future__ import annotations

from .context import RunContext, build_run_context
from .orchestrator import Orchestrator

__all__ = ["Orchestrator", "RunContext", "build_run_context"]
