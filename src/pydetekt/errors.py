# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error and warning types raised while running detekt."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


class DetektError(RuntimeError):
    """Base class for fatal conditions that stop a detekt run."""


class SettingsError(DetektError):
    """Raised when user supplied settings cannot be interpreted."""


class ConfigNotFoundError(DetektError):
    """Raised when no detekt config file exists above the target file."""

    def __init__(self, searched_names: Sequence[str], start: Path) -> None:
        """Record the candidate names and the directory the search began in.

        Args:
            searched_names: Ordered config file names that were looked for.
            start: Directory where the upward search started.
        """

        self.searched_names = tuple(searched_names)
        self.start = start
        names = ", ".join(self.searched_names)
        super().__init__(f"Config file not found, searched for: {{{names}}}\nStarted at: {start}")


class InvalidConfigError(DetektError):
    """Raised when detekt rejects its configuration (exit code 3)."""

    def __init__(self, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(f"Config invalid {stderr}")


class ReportUnreadableError(DetektError):
    """Raised when the SARIF report produced by detekt cannot be opened."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Unable to read the output of detekt stored in: {path}")


class ReportMalformedError(DetektError):
    """Raised when the SARIF report is not valid JSON or lacks a run."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Malformed detekt report in {path}: {detail}")


class ToolLaunchError(DetektError):
    """Raised when the detekt executable could not be started at all."""

    def __init__(self, executable: str, reason: str) -> None:
        self.executable = executable
        self.reason = reason
        super().__init__(f"Unable to start '{executable}': {reason}")


@dataclass(frozen=True, slots=True)
class BaselineNotFound:
    """Non-fatal warning emitted when a configured baseline file is missing."""

    searched_names: tuple[str, ...]
    start: Path

    @property
    def message(self) -> str:
        """Return the user-facing warning text."""

        return "Baseline file not found, searched for: " + ", ".join(self.searched_names)

    def __str__(self) -> str:
        return self.message


__all__ = [
    "BaselineNotFound",
    "ConfigNotFoundError",
    "DetektError",
    "InvalidConfigError",
    "ReportMalformedError",
    "ReportUnreadableError",
    "SettingsError",
    "ToolLaunchError",
]
