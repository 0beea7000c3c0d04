# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit runtime context shared by every run of one session."""

from __future__ import annotations

from dataclasses import dataclass

from ..config.models import DetektSettings
from ..execution.cache import CommandCache
from ..execution.command import CommandBuilder
from ..execution.process import ProcessRunner
from ..parsers.sarif import ReportParser
from ..reporting.notifier import ConsoleNotifier, Notifier
from ..reporting.sink import DiagnosticSink, InMemoryDiagnosticStore


@dataclass(slots=True)
class RunContext:
    """Collaborators an :class:`~pydetekt.orchestration.Orchestrator` uses."""

    settings: DetektSettings
    builder: CommandBuilder
    cache: CommandCache
    runner: ProcessRunner
    parser: ReportParser
    notifier: Notifier
    sink: DiagnosticSink

    def close(self) -> None:
        """Shut down the process runner."""

        self.runner.shutdown()


def build_run_context(
    settings: DetektSettings,
    *,
    notifier: Notifier | None = None,
    sink: DiagnosticSink | None = None,
    runner: ProcessRunner | None = None,
    parser: ReportParser | None = None,
) -> RunContext:
    """Construct a :class:`RunContext` for ``settings``.

    Args:
        settings: Settings shared by every component.
        notifier: Message sink; defaults to a console notifier honouring
            ``settings.log_level``.
        sink: Diagnostic sink; defaults to an in-memory store.
        runner: Process runner override.
        parser: Report parser override.

    Returns:
        RunContext: Context ready to hand to an orchestrator.
    """

    builder = CommandBuilder(settings)
    return RunContext(
        settings=settings,
        builder=builder,
        cache=CommandCache(settings, builder=builder),
        runner=runner or ProcessRunner(max_workers=settings.max_workers),
        parser=parser or ReportParser(keep_reports=settings.keep_reports),
        notifier=notifier or ConsoleNotifier(threshold=settings.log_level),
        sink=sink or InMemoryDiagnosticStore(),
    )


__all__ = ["RunContext", "build_run_context"]
