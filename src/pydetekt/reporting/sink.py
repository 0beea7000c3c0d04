# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic publication targets and terminal rendering."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from threading import Lock
from typing import Protocol

from rich import box
from rich.console import Console
from rich.table import Table

from ..core.models import Diagnostic, TargetIdentity
from ..core.severity import Severity


class DiagnosticSink(Protocol):
    """Receiver of the diagnostics produced by a completed run."""

    def publish(self, identity: TargetIdentity, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the diagnostics shown for ``identity``."""
        ...


class InMemoryDiagnosticStore:
    """Keep the latest published diagnostics per identity key."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[Hashable, tuple[Diagnostic, ...]] = {}
        self.publish_count = 0

    def publish(self, identity: TargetIdentity, diagnostics: Sequence[Diagnostic]) -> None:
        with self._lock:
            self._entries[identity.key] = tuple(diagnostics)
            self.publish_count += 1

    def get(self, key: Hashable) -> tuple[Diagnostic, ...] | None:
        """Return the diagnostics last published for ``key``."""

        with self._lock:
            return self._entries.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.NOTE: "cyan",
    Severity.NONE: "dim",
}


def render_diagnostics(console: Console, diagnostics: Sequence[Diagnostic], *, title: str | None = None) -> None:
    """Print ``diagnostics`` as a table using one-based editor positions.

    Args:
        console: Destination console.
        diagnostics: Diagnostics to show, in order.
        title: Optional table title, typically the target path.
    """

    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Rule", style="bold")
    table.add_column("Message", overflow="fold")
    for diag in diagnostics:
        style = _SEVERITY_STYLES.get(diag.severity, "")
        table.add_row(
            str(diag.start_line + 1),
            str(diag.start_column + 1),
            f"[{style}]{diag.rule_id or '-'}[/]" if style else diag.rule_id or "-",
            diag.message,
        )
    console.print(table)


__all__ = ["DiagnosticSink", "InMemoryDiagnosticStore", "render_diagnostics"]
