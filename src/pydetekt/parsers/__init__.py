# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning detekt reports into diagnostics."""

from __future__ import annotations

from .sarif import ReportParser, SarifLog, parse_report

__all__ = ["ReportParser", "SarifLog", "parse_report"]
