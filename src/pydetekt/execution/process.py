# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run detekt processes on a worker pool without blocking the caller.

Each submitted invocation completes exactly once through its
:class:`~concurrent.futures.Future`. There is no retry and no timeout: a
detekt process runs until it exits or is terminated through
:meth:`ProcessRunner.terminate`.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal

# Bandit: subprocess usage is intentional; commands are argument lists built by
# CommandBuilder and never pass through a shell.
import subprocess  # nosec B404
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from threading import Lock
from types import TracebackType
from typing import Final

from ..core.models import ProcessOutcome, ResolvedInvocation
from ..errors import ToolLaunchError

LOGGER = logging.getLogger(__name__)

INVALID_CONFIG_EXIT_CODE: Final[int] = 3
CANCELLED_EXIT_CODE: Final[int] = -1
_POSIX: Final[bool] = os.name == "posix"


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable resolved against ``PATH``.

    Raises:
        ToolLaunchError: If the executable cannot be found.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]
    resolved = shutil.which(head)
    if resolved is None:
        raise ToolLaunchError(head, "executable was not found on PATH")
    return [resolved, *rest]


def _terminate(process: subprocess.Popen[str]) -> None:
    """Send SIGTERM to ``process`` and, on POSIX, to its whole process group.

    detekt is usually a launcher script starting a JVM, so signalling only the
    script would leave the JVM holding the stderr pipe open.
    """

    if process.poll() is not None:
        return
    try:
        if _POSIX:
            os.killpg(process.pid, signal.SIGTERM)
        else:
            process.terminate()
    except ProcessLookupError:
        pass


class ProcessRunner:
    """Execute :class:`ResolvedInvocation` objects on a thread pool."""

    def __init__(self, *, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pydetekt")
        self._lock = Lock()
        self._running: dict[Path, subprocess.Popen[str]] = {}
        self._pending: dict[Path, Future[ProcessOutcome]] = {}
        self._cancelled: set[Path] = set()

    def __enter__(self) -> ProcessRunner:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown()

    def submit(self, invocation: ResolvedInvocation) -> Future[ProcessOutcome]:
        """Start ``invocation`` in the background.

        Args:
            invocation: Command to execute; its scratch path identifies the run.

        Returns:
            Future[ProcessOutcome]: Resolves with the exit code and stderr, or
            raises :class:`ToolLaunchError` when the process cannot start.
        """

        future = self._executor.submit(self._run, invocation)
        with self._lock:
            if not future.done():
                self._pending[invocation.scratch_path] = future
        future.add_done_callback(lambda _: self._forget(invocation.scratch_path))
        return future

    def terminate(self, invocation: ResolvedInvocation) -> bool:
        """Stop ``invocation`` if it is queued or still running.

        A queued invocation never starts; a running process is sent SIGTERM.
        Its future still completes, with a non-zero exit code.

        Returns:
            bool: ``True`` when there was something to stop.
        """

        key = invocation.scratch_path
        with self._lock:
            process = self._running.get(key)
            future = self._pending.get(key)
            if process is None and (future is None or future.done()):
                return False
            self._cancelled.add(key)
        if process is not None:
            LOGGER.debug("terminating detekt for %s", invocation.target_path)
            _terminate(process)
        return True

    def shutdown(self, *, wait: bool = True) -> None:
        """Terminate running processes and stop the worker pool."""

        with self._lock:
            processes = list(self._running.values())
        for process in processes:
            _terminate(process)
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def _forget(self, key: Path) -> None:
        with self._lock:
            self._pending.pop(key, None)
            self._cancelled.discard(key)

    def _run(self, invocation: ResolvedInvocation) -> ProcessOutcome:
        key = invocation.scratch_path
        argv = _normalize_args(invocation.argv)
        LOGGER.debug("running %s", " ".join(argv))
        with self._lock:
            if key in self._cancelled:
                return ProcessOutcome(returncode=CANCELLED_EXIT_CODE, stderr="cancelled before start")
            try:
                # Bandit: argv is an explicit list and shell=False.
                process = subprocess.Popen(  # nosec B603
                    argv,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    text=True,
                    errors="replace",
                    start_new_session=_POSIX,
                )
            except OSError as exc:
                raise ToolLaunchError(invocation.argv[0], str(exc)) from exc
            self._running[key] = process
        try:
            _, stderr = process.communicate()
        finally:
            with self._lock:
                self._running.pop(key, None)
        return ProcessOutcome(returncode=process.returncode, stderr=stderr or "")


__all__ = ["CANCELLED_EXIT_CODE", "INVALID_CONFIG_EXIT_CODE", "ProcessRunner"]
