# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for background detekt process execution."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from pydetekt.config import DetektSettings
from pydetekt.core.models import TargetIdentity
from pydetekt.errors import ToolLaunchError
from pydetekt.execution import CommandBuilder, ProcessRunner
from tests.helpers.detekt import sarif_document


def _invocation(script: Path, identity: TargetIdentity, project: Path):
    builder = CommandBuilder(DetektSettings(executable=str(script)))
    return builder.build_invocation(identity, config_path=project / "detekt.yml")


def test_runner_captures_exit_code_and_stderr(fake_detekt, project: Path, identity: TargetIdentity) -> None:
    script = fake_detekt(sarif_document(), exit_code=2, stderr="lint failures")
    invocation = _invocation(script, identity, project)

    with ProcessRunner(max_workers=1) as runner:
        outcome = runner.submit(invocation).result(timeout=30)

    assert outcome.returncode == 2
    assert outcome.stderr == "lint failures"
    assert invocation.scratch_path.read_text(encoding="utf-8") == sarif_document()
    invocation.scratch_path.unlink()


def test_runner_passes_full_argument_vector(fake_detekt, project: Path, identity: TargetIdentity) -> None:
    script = fake_detekt(sarif_document())
    invocation = _invocation(script, identity, project)

    with ProcessRunner(max_workers=1) as runner:
        runner.submit(invocation).result(timeout=30)

    logged = Path(f"{script}.log").read_text(encoding="utf-8").strip()
    assert logged == " ".join(invocation.argv[1:])
    invocation.scratch_path.unlink(missing_ok=True)


def test_runner_does_not_block_submit(fake_detekt, project: Path, identity: TargetIdentity) -> None:
    script = fake_detekt(sarif_document(), sleep=1)
    invocation = _invocation(script, identity, project)

    with ProcessRunner(max_workers=1) as runner:
        started = time.monotonic()
        future = runner.submit(invocation)
        assert time.monotonic() - started < 0.5
        assert future.result(timeout=30).returncode == 0
    invocation.scratch_path.unlink(missing_ok=True)


def test_missing_executable_fails_the_future(project: Path, identity: TargetIdentity) -> None:
    builder = CommandBuilder(DetektSettings(executable="detekt-definitely-not-installed-9c1"))
    invocation = builder.build_invocation(identity, config_path=project / "detekt.yml")

    with ProcessRunner(max_workers=1) as runner:
        future = runner.submit(invocation)
        with pytest.raises(ToolLaunchError):
            future.result(timeout=30)
    invocation.scratch_path.unlink(missing_ok=True)


def test_terminate_stops_running_process(fake_detekt, project: Path, identity: TargetIdentity) -> None:
    script = fake_detekt(sarif_document(), sleep=30)
    invocation = _invocation(script, identity, project)

    with ProcessRunner(max_workers=1) as runner:
        future = runner.submit(invocation)
        deadline = time.monotonic() + 10
        while not Path(f"{script}.log").exists() and time.monotonic() < deadline:
            time.sleep(0.05)
        assert runner.terminate(invocation)
        outcome = future.result(timeout=10)

    assert outcome.returncode != 0
    assert not runner.terminate(invocation)
    invocation.scratch_path.unlink(missing_ok=True)
