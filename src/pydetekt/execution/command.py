# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose detekt command lines for a single target file."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Final

from ..config.models import DetektSettings
from ..core.models import REPORT_FORMAT_PREFIX, ResolvedInvocation, TargetIdentity

REPORT_FLAG: Final[str] = "-r"
INCLUDES_FLAG: Final[str] = "--includes"
BUILD_UPON_DEFAULT_FLAG: Final[str] = "--build-upon-default-config"
CONFIG_FLAG: Final[str] = "--config"
BASELINE_FLAG: Final[str] = "--baseline"
SCRATCH_PREFIX: Final[str] = "pydetekt-"
SCRATCH_SUFFIX: Final[str] = ".sarif"


def allocate_scratch_path() -> Path:
    """Reserve a new, unique temporary file for a SARIF report.

    The file is created empty so the name cannot be handed out twice; detekt
    overwrites it.
    """

    fd, name = tempfile.mkstemp(prefix=SCRATCH_PREFIX, suffix=SCRATCH_SUFFIX)
    os.close(fd)
    return Path(name)


class CommandBuilder:
    """Build :class:`ResolvedInvocation` objects from resolved paths."""

    def __init__(self, settings: DetektSettings) -> None:
        self._settings = settings

    def build_argv(
        self,
        target_path: Path,
        *,
        scratch_path: Path,
        config_path: Path,
        baseline_path: Path | None = None,
    ) -> tuple[str, ...]:
        """Return the detekt argument vector for ``target_path``.

        Args:
            target_path: Source file passed to ``--includes``.
            scratch_path: Report destination for the SARIF output.
            config_path: Resolved detekt configuration file.
            baseline_path: Optional baseline file.

        Returns:
            tuple[str, ...]: Complete command line including the executable.
        """

        argv = [
            self._settings.executable,
            REPORT_FLAG,
            f"{REPORT_FORMAT_PREFIX}{scratch_path}",
            INCLUDES_FLAG,
            str(target_path),
        ]
        if self._settings.build_upon_default_config:
            argv.append(BUILD_UPON_DEFAULT_FLAG)
        argv.extend((CONFIG_FLAG, str(config_path)))
        if baseline_path is not None:
            argv.extend((BASELINE_FLAG, str(baseline_path)))
        return tuple(argv)

    def build_invocation(
        self,
        identity: TargetIdentity,
        *,
        config_path: Path,
        baseline_path: Path | None = None,
    ) -> ResolvedInvocation:
        """Allocate a scratch report path and bind a full invocation to it."""

        scratch_path = allocate_scratch_path()
        argv = self.build_argv(
            identity.path,
            scratch_path=scratch_path,
            config_path=config_path,
            baseline_path=baseline_path,
        )
        return ResolvedInvocation(
            argv=argv,
            scratch_path=scratch_path,
            identity=identity,
            target_path=identity.path,
        )

    @staticmethod
    def rebind(invocation: ResolvedInvocation) -> ResolvedInvocation:
        """Return ``invocation`` pointed at a freshly allocated scratch path."""

        return invocation.with_scratch_path(allocate_scratch_path())


__all__ = [
    "BASELINE_FLAG",
    "BUILD_UPON_DEFAULT_FLAG",
    "CONFIG_FLAG",
    "CommandBuilder",
    "INCLUDES_FLAG",
    "REPORT_FLAG",
    "allocate_scratch_path",
]
