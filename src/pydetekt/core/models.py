# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the pydetekt package."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..errors import BaselineNotFound, DetektError
from .severity import Severity

REPORT_FORMAT_PREFIX = "sarif:"


class TargetIdentity(BaseModel):
    """Identify the file under analysis for one editing session."""

    model_config = ConfigDict(frozen=True)

    key: str | int
    path: Path

    @property
    def directory(self) -> Path:
        """Return the directory the configuration search starts from."""

        return self.path.parent


class ConfigSearchResult(BaseModel):
    """Outcome of an upward search for one of several file names."""

    model_config = ConfigDict(frozen=True)

    searched_names: tuple[str, ...]
    start: Path
    path: Path | None = None
    matched_name: str | None = None

    @property
    def found(self) -> bool:
        """Return ``True`` when a candidate file was located."""

        return self.path is not None


class ResolvedInvocation(BaseModel):
    """Fully resolved detekt command line bound to a target file."""

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    scratch_path: Path
    identity: TargetIdentity
    target_path: Path

    def with_scratch_path(self, scratch_path: Path) -> ResolvedInvocation:
        """Return a copy whose report selector points at ``scratch_path``.

        Args:
            scratch_path: Freshly allocated report destination.

        Returns:
            ResolvedInvocation: New invocation sharing every other argument.
        """

        old_selector = f"{REPORT_FORMAT_PREFIX}{self.scratch_path}"
        new_selector = f"{REPORT_FORMAT_PREFIX}{scratch_path}"
        argv = tuple(new_selector if arg == old_selector else arg for arg in self.argv)
        return self.model_copy(update={"argv": argv, "scratch_path": scratch_path})


class ResolveResult(BaseModel):
    """Invocation handed out by the command cache plus any warning."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    invocation: ResolvedInvocation
    warning: BaselineNotFound | None = None
    cached: bool = False


class ProcessOutcome(BaseModel):
    """Exit status and captured stderr of one detekt process."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stderr: str = ""


class Diagnostic(BaseModel):
    """Zero-based diagnostic derived from one SARIF result."""

    model_config = ConfigDict(frozen=True)

    identity: TargetIdentity
    start_line: int
    end_line: int
    start_column: int
    end_column: int
    message: str
    rule_id: str | None = None
    severity: Severity = Severity.WARNING


class RunState(str, Enum):
    """States a single orchestrated run moves through."""

    RESOLVING = "resolving"
    INVOKING = "invoking"
    AWAITING = "awaiting"
    CLASSIFYING = "classifying"
    PARSING = "parsing"
    DONE = "done"
    FAILED = "failed"


class RunResult(BaseModel):
    """Terminal result of one orchestrated run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identity: TargetIdentity
    sequence: int
    state: RunState
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    error: DetektError | None = None
    warning: BaselineNotFound | None = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        """Return ``True`` when the run reached ``DONE``."""

        return self.state is RunState.DONE


__all__ = [
    "ConfigSearchResult",
    "Diagnostic",
    "ProcessOutcome",
    "REPORT_FORMAT_PREFIX",
    "ResolveResult",
    "ResolvedInvocation",
    "RunResult",
    "RunState",
    "TargetIdentity",
]
