# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Route run notifications to the user, filtered by a level threshold."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Final, Protocol

from ..config.models import NotifyLevel
from ..logging import fail, info, warn

NOTIFY_PREFIX: Final[str] = "Detekt: "


class Notifier(Protocol):
    """Sink for user-facing messages produced by a run."""

    def notify(self, message: str, level: NotifyLevel) -> None:
        """Deliver ``message`` at ``level``."""
        ...


@dataclass(slots=True)
class ConsoleNotifier:
    """Print notifications through the Rich logging helpers."""

    threshold: NotifyLevel = NotifyLevel.INFO
    use_emoji: bool = False
    use_color: bool | None = None

    def notify(self, message: str, level: NotifyLevel) -> None:
        """Print ``message`` unless it falls below :attr:`threshold`.

        ``NotifyLevel.NONE`` as threshold silences every message.
        """

        if self.threshold is NotifyLevel.NONE or level < self.threshold:
            return
        text = f"{NOTIFY_PREFIX}{message}"
        if level >= NotifyLevel.ERROR:
            fail(text, use_emoji=self.use_emoji, use_color=self.use_color)
        elif level >= NotifyLevel.WARN:
            warn(text, use_emoji=self.use_emoji, use_color=self.use_color)
        else:
            info(text, use_emoji=self.use_emoji, use_color=self.use_color)


@dataclass(slots=True)
class RecordingNotifier:
    """Collect notifications in memory, e.g. for embedding or tests."""

    threshold: NotifyLevel = NotifyLevel.TRACE
    messages: list[tuple[NotifyLevel, str]] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def notify(self, message: str, level: NotifyLevel) -> None:
        """Record ``message`` with the ``"Detekt: "`` prefix when ``level`` passes.

        Args:
            message: Text to record.
            level: Severity compared against :attr:`threshold`.
        """

        if self.threshold is NotifyLevel.NONE or level < self.threshold:
            return
        with self._lock:
            self.messages.append((level, f"{NOTIFY_PREFIX}{message}"))

    def at(self, level: NotifyLevel) -> list[str]:
        """Return the recorded messages emitted at exactly ``level``."""

        with self._lock:
            return [message for recorded, message in self.messages if recorded is level]


__all__ = ["ConsoleNotifier", "NOTIFY_PREFIX", "Notifier", "RecordingNotifier"]
