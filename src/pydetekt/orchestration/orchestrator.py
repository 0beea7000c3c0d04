# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive a detekt run from trigger to published diagnostics.

A run moves through ``RESOLVING -> INVOKING -> AWAITING -> CLASSIFYING ->
PARSING -> DONE`` and may leave any state for ``FAILED``. The only suspension
point is the detekt process: :meth:`Orchestrator.trigger` returns once the
process has been submitted and the run resumes in the runner's completion
callback.

Every trigger receives a per-identity sequence number. Only the run holding the
latest number for its identity may publish diagnostics or notifications; an
older run that is still in flight when a newer trigger arrives has its process
terminated and its eventual result is marked as superseded.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from concurrent.futures import CancelledError, Future
from dataclasses import dataclass
from functools import partial
from threading import Lock

from ..config.models import NotifyLevel
from ..core.models import Diagnostic, ProcessOutcome, ResolvedInvocation, RunResult, RunState, TargetIdentity
from ..errors import BaselineNotFound, ConfigNotFoundError, DetektError, InvalidConfigError
from ..execution.process import INVALID_CONFIG_EXIT_CODE
from .context import RunContext

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _Run:
    """Mutable bookkeeping for one in-progress run."""

    identity: TargetIdentity
    sequence: int
    result: Future[RunResult]
    state: RunState = RunState.RESOLVING
    invocation: ResolvedInvocation | None = None
    warning: BaselineNotFound | None = None

    def advance(self, state: RunState) -> None:
        LOGGER.debug("run %s#%d: %s -> %s", self.identity.key, self.sequence, self.state.value, state.value)
        self.state = state


class Orchestrator:
    """Resolve, run, classify and parse detekt for triggered targets."""

    def __init__(self, context: RunContext) -> None:
        self._context = context
        self._lock = Lock()
        self._publish_lock = Lock()
        self._sequences: dict[Hashable, int] = {}
        self._inflight: dict[Hashable, _Run] = {}

    @property
    def context(self) -> RunContext:
        """Return the context shared by every run."""

        return self._context

    def trigger(self, identity: TargetIdentity) -> Future[RunResult]:
        """Start a run for ``identity`` without waiting for detekt.

        Args:
            identity: Target that was opened or saved.

        Returns:
            Future[RunResult]: Completes when the run reaches ``DONE`` or
            ``FAILED``. Configuration errors complete it before returning.
        """

        run = _Run(identity=identity, sequence=self._begin(identity.key), result=Future())
        try:
            resolved = self._context.cache.resolve(identity)
        except ConfigNotFoundError as exc:
            self._finish(run, RunState.FAILED, error=exc)
            return run.result

        if resolved.warning is not None:
            run.warning = resolved.warning
            self._notify_if_current(run, resolved.warning.message, NotifyLevel.WARN)

        run.advance(RunState.INVOKING)
        invocation = resolved.invocation
        if resolved.cached:
            invocation = self._context.builder.rebind(invocation)
        run.invocation = invocation

        # Registration and the announcement share the publish lock so a newer
        # trigger cannot slip in between them.
        with self._publish_lock:
            with self._lock:
                current = self._sequences.get(identity.key) == run.sequence
                if current:
                    self._inflight[identity.key] = run
            if current:
                self._context.notifier.notify(f"Validating {identity.path}", NotifyLevel.INFO)
        if not current:
            self._context.parser.cleanup(invocation.scratch_path)
            self._finish(run, RunState.FAILED, superseded=True)
            return run.result

        run.advance(RunState.AWAITING)
        try:
            process = self._context.runner.submit(invocation)
        except BaseException:
            self._forget(run)
            self._context.parser.cleanup(invocation.scratch_path)
            raise
        process.add_done_callback(partial(self._on_process_done, run, invocation))
        if not self._is_current(run):
            # A newer trigger ran before the process was submitted, so its
            # terminate request found nothing to stop.
            LOGGER.debug("run %s#%d superseded during submit", identity.key, run.sequence)
            self._context.runner.terminate(invocation)
        return run.result

    def run(self, identity: TargetIdentity) -> RunResult:
        """Trigger a run and block until it completes."""

        return self.trigger(identity).result()

    def invalidate(self, key: Hashable) -> bool:
        """Forget the cached command for ``key`` so the next run re-resolves."""

        return self._context.cache.invalidate(key)

    def close(self) -> None:
        """Stop the process runner, terminating any running detekt."""

        self._context.close()

    def _begin(self, key: Hashable) -> int:
        """Allocate the next sequence for ``key`` and stop any older run."""

        with self._lock:
            sequence = self._sequences.get(key, 0) + 1
            self._sequences[key] = sequence
            previous = self._inflight.pop(key, None)
        if previous is not None and previous.invocation is not None:
            LOGGER.debug("superseding run %s#%d", key, previous.sequence)
            self._context.runner.terminate(previous.invocation)
        return sequence

    def _is_current(self, run: _Run) -> bool:
        with self._lock:
            return self._sequences.get(run.identity.key) == run.sequence

    def _forget(self, run: _Run) -> None:
        with self._lock:
            if self._inflight.get(run.identity.key) is run:
                del self._inflight[run.identity.key]

    def _on_process_done(
        self,
        run: _Run,
        invocation: ResolvedInvocation,
        process: Future[ProcessOutcome],
    ) -> None:
        """Complete ``run`` once its detekt process has finished.

        This runs as a done-callback, where ``concurrent.futures`` would only
        log an escaping exception. Every failure is therefore routed into
        ``run.result`` so waiters are always released.

        Args:
            run: Bookkeeping for the run being completed.
            invocation: Invocation the process was started with.
            process: Completed future returned by the process runner.
        """

        run.advance(RunState.CLASSIFYING)
        try:
            self._classify(run, invocation, process)
        except CancelledError:
            LOGGER.debug("detekt process for %s was cancelled", run.identity.path)
            self._abort(run, invocation, None)
        except BaseException as exc:
            LOGGER.exception("run for %s failed unexpectedly", run.identity.path)
            self._abort(run, invocation, exc)

    def _abort(self, run: _Run, invocation: ResolvedInvocation, exc: BaseException | None) -> None:
        """Release ``run`` after an unexpected failure.

        The result future is cancelled when ``exc`` is ``None`` and otherwise
        carries ``exc``. A future that was already completed is left alone.
        """

        run.advance(RunState.FAILED)
        self._forget(run)
        try:
            self._context.parser.cleanup(invocation.scratch_path)
        finally:
            if not run.result.done():
                if exc is None:
                    run.result.cancel()
                else:
                    run.result.set_exception(exc)

    def _classify(self, run: _Run, invocation: ResolvedInvocation, process: Future[ProcessOutcome]) -> None:
        try:
            outcome = process.result()
        except DetektError as exc:
            self._context.parser.cleanup(invocation.scratch_path)
            self._finish(run, RunState.FAILED, error=exc)
            return

        if not self._is_current(run):
            self._context.parser.cleanup(invocation.scratch_path)
            self._finish(run, RunState.FAILED, superseded=True)
            return

        if outcome.returncode == INVALID_CONFIG_EXIT_CODE:
            self._context.parser.cleanup(invocation.scratch_path)
            self._finish(run, RunState.FAILED, error=InvalidConfigError(outcome.stderr))
            return

        run.advance(RunState.PARSING)
        try:
            diagnostics = self._context.parser.parse(invocation.scratch_path, run.identity)
        except DetektError as exc:
            self._finish(run, RunState.FAILED, error=exc)
            return
        self._finish(run, RunState.DONE, diagnostics=diagnostics)

    def _notify_if_current(self, run: _Run, message: str, level: NotifyLevel) -> None:
        with self._publish_lock:
            if self._is_current(run):
                self._context.notifier.notify(message, level)

    def _finish(
        self,
        run: _Run,
        state: RunState,
        *,
        diagnostics: list[Diagnostic] | None = None,
        error: DetektError | None = None,
        superseded: bool = False,
    ) -> None:
        """Publish the terminal state of ``run`` and complete its future."""

        run.advance(state)
        self._forget(run)

        with self._publish_lock:
            superseded = superseded or not self._is_current(run)
            if not superseded:
                self._publish(run, diagnostics, error)

        run.result.set_result(
            RunResult(
                identity=run.identity,
                sequence=run.sequence,
                state=state,
                diagnostics=tuple(diagnostics or ()),
                error=error,
                warning=run.warning,
                superseded=superseded,
            )
        )

    def _publish(self, run: _Run, diagnostics: list[Diagnostic] | None, error: DetektError | None) -> None:
        notifier = self._context.notifier
        if error is not None:
            notifier.notify(str(error), NotifyLevel.ERROR)
            return
        if diagnostics is None:
            return
        if diagnostics:
            notifier.notify(f"Found {len(diagnostics)} issues", NotifyLevel.ERROR)
        else:
            notifier.notify("No issues found", NotifyLevel.INFO)
        self._context.sink.publish(run.identity, diagnostics)


__all__ = ["Orchestrator"]
