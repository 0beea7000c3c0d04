# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pydetekt.core.models import TargetIdentity
from tests.helpers.detekt import SpyParser, StubRunner


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project root holding ``detekt.yml`` and ``src/Main.kt``."""

    root = tmp_path / "proj"
    source_dir = root / "src" / "main" / "kotlin"
    source_dir.mkdir(parents=True)
    (root / "detekt.yml").write_text("build:\n  maxIssues: 0\n", encoding="utf-8")
    (source_dir / "Main.kt").write_text("fun main() = println(42)\n", encoding="utf-8")
    return root


@pytest.fixture
def identity(project: Path) -> TargetIdentity:
    path = project / "src" / "main" / "kotlin" / "Main.kt"
    return TargetIdentity(key=1, path=path)


@pytest.fixture
def stub_runner() -> StubRunner:
    return StubRunner()


@pytest.fixture
def spy_parser() -> SpyParser:
    return SpyParser()


FakeDetekt = Callable[..., Path]


@pytest.fixture
def fake_detekt(tmp_path: Path) -> FakeDetekt:
    """Return a factory writing an executable stand-in for detekt.

    The script copies a canned report to the ``sarif:`` destination, echoes
    ``stderr`` and exits with ``exit_code``. Each invocation's arguments are
    appended to ``<script>.log``.
    """

    counter = {"value": 0}

    def factory(report: str | None = None, *, exit_code: int = 0, stderr: str = "", sleep: float = 0) -> Path:
        counter["value"] += 1
        base = tmp_path / "bin"
        base.mkdir(exist_ok=True)
        script = base / f"detekt-{counter['value']}"
        report_file = base / f"report-{counter['value']}.sarif"
        copy_line = ""
        if report is not None:
            report_file.write_text(report, encoding="utf-8")
            copy_line = f'cat "{report_file}" > "$out"'
        sleep_line = f"sleep {sleep}" if sleep else ""
        script.write_text(
            "\n".join(
                [
                    "#!/bin/sh",
                    f'echo "$*" >> "{script}.log"',
                    'out=""',
                    'while [ "$#" -gt 0 ]; do',
                    '  if [ "$1" = "-r" ]; then shift; out="${1#sarif:}"; fi',
                    "  shift",
                    "done",
                    sleep_line,
                    copy_line,
                    f"printf '%s' '{stderr}' >&2" if stderr else "",
                    f"exit {exit_code}",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    return factory
