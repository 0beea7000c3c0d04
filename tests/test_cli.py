# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the pydetekt command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from pydetekt.cli.app import EXIT_CLEAN, EXIT_FAILURE, EXIT_FINDINGS, app
from tests.helpers.detekt import sarif_document, sarif_result


def test_check_reports_findings(fake_detekt, project: Path) -> None:
    script = fake_detekt(sarif_document(sarif_result(3, 3, 5, 9, "Magic number")), exit_code=2)
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(project), "--root", str(project), "--executable", str(script)])

    assert result.exit_code == EXIT_FINDINGS
    assert "Magic number" in result.stdout


def test_check_clean_run(fake_detekt, project: Path) -> None:
    script = fake_detekt(sarif_document())
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(project), "--root", str(project), "--executable", str(script)])

    assert result.exit_code == EXIT_CLEAN
    assert "1 file(s) checked, no findings" in result.stdout


def test_check_invalid_config_exit(fake_detekt, project: Path) -> None:
    script = fake_detekt(None, exit_code=3, stderr="bad rule set")
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(project), "--root", str(project), "--executable", str(script)])

    assert result.exit_code == EXIT_FAILURE


def test_check_passes_no_build_upon_default_config(fake_detekt, project: Path) -> None:
    script = fake_detekt(sarif_document())
    runner = CliRunner()

    runner.invoke(
        app,
        [
            "check",
            str(project),
            "--root",
            str(project),
            "--executable",
            str(script),
            "--no-build-upon-default-config",
        ],
    )

    logged = Path(f"{script}.log").read_text(encoding="utf-8")
    assert "--build-upon-default-config" not in logged
    assert "--config" in logged


def test_check_without_matching_files(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(project), "--root", str(project), "--pattern", "*.java"])

    assert result.exit_code == EXIT_CLEAN


def test_show_config_json(tmp_path: Path) -> None:
    (tmp_path / ".pydetekt.toml").write_text('baseline-names = ["baseline.xml"]\n', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["show-config", "--root", str(tmp_path), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["settings"]["baseline_names"] == ["baseline.xml"]
    assert payload["settings"]["log_level"] == "info"
    assert len(payload["sources"]) == 1


def test_show_config_rejects_unknown_keys(tmp_path: Path) -> None:
    (tmp_path / ".pydetekt.toml").write_text("surprise = 1\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["show-config", "--root", str(tmp_path)])

    assert result.exit_code == EXIT_FAILURE
