# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Notification and diagnostic publication collaborators."""

from __future__ import annotations

from .notifier import NOTIFY_PREFIX, ConsoleNotifier, Notifier, RecordingNotifier
from .sink import DiagnosticSink, InMemoryDiagnosticStore, render_diagnostics

__all__ = [
    "ConsoleNotifier",
    "DiagnosticSink",
    "InMemoryDiagnosticStore",
    "NOTIFY_PREFIX",
    "Notifier",
    "RecordingNotifier",
    "render_diagnostics",
]
