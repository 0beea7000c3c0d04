# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for SARIF report parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pydetekt.core.models import TargetIdentity
from pydetekt.core.severity import Severity
from pydetekt.errors import ReportMalformedError, ReportUnreadableError
from pydetekt.parsers import ReportParser, parse_report
from tests.helpers.detekt import sarif_document, sarif_result

IDENTITY = TargetIdentity(key=3, path=Path("/proj/src/Main.kt"))


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "report.sarif"
    path.write_text(content, encoding="utf-8")
    return path


def test_positions_are_converted_to_zero_based(tmp_path: Path) -> None:
    path = _write(tmp_path, sarif_document(sarif_result(10, 12, 3, 7, "Magic number")))

    diagnostics = ReportParser().parse(path, IDENTITY)

    assert len(diagnostics) == 1
    diag = diagnostics[0]
    assert (diag.start_line, diag.end_line, diag.start_column, diag.end_column) == (9, 11, 2, 6)
    assert diag.message == "Magic number"
    assert diag.identity == IDENTITY
    assert diag.rule_id == "MagicNumber"
    assert diag.severity is Severity.WARNING


def test_empty_results_yield_no_diagnostics(tmp_path: Path) -> None:
    path = _write(tmp_path, sarif_document())

    assert ReportParser().parse(path, IDENTITY) == []


def test_order_follows_report(tmp_path: Path) -> None:
    results = [sarif_result(line, line, 1, 2, f"finding {line}") for line in (30, 2, 15)]
    path = _write(tmp_path, sarif_document(*results))

    diagnostics = ReportParser().parse(path, IDENTITY)

    assert [diag.message for diag in diagnostics] == ["finding 30", "finding 2", "finding 15"]
    assert [diag.start_line for diag in diagnostics] == [29, 1, 14]


def test_missing_optional_region_fields_use_sarif_defaults() -> None:
    payload = sarif_document(
        {
            "message": {"text": "Line only"},
            "locations": [{"physicalLocation": {"region": {"startLine": 4}}}],
            "level": "error",
        }
    )

    (diag,) = parse_report(payload, IDENTITY, source=Path("inline"))

    assert (diag.start_line, diag.end_line, diag.start_column, diag.end_column) == (3, 3, 0, 0)
    assert diag.rule_id is None
    assert diag.severity is Severity.ERROR


def test_only_first_run_is_read() -> None:
    document = json.loads(sarif_document(sarif_result(1, 1, 1, 1, "first")))
    document["runs"].append({"results": [sarif_result(2, 2, 1, 1, "second")]})

    diagnostics = parse_report(json.dumps(document), IDENTITY, source=Path("inline"))

    assert [diag.message for diag in diagnostics] == ["first"]


def test_missing_file_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(ReportUnreadableError) as excinfo:
        ReportParser().parse(tmp_path / "missing.sarif", IDENTITY)

    assert "Unable to read the output of detekt" in str(excinfo.value)


def test_empty_file_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(ReportUnreadableError):
        ReportParser().parse(_write(tmp_path, ""), IDENTITY)


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        json.dumps({"version": "2.1.0"}),
        json.dumps({"runs": []}),
        json.dumps({"runs": [{"tool": {}}]}),
        json.dumps({"runs": [{"results": [{"message": {"text": "x"}, "locations": []}]}]}),
    ],
)
def test_malformed_reports(tmp_path: Path, content: str) -> None:
    with pytest.raises(ReportMalformedError):
        ReportParser().parse(_write(tmp_path, content), IDENTITY)


def test_report_is_removed_after_parsing(tmp_path: Path) -> None:
    path = _write(tmp_path, sarif_document())

    ReportParser().parse(path, IDENTITY)

    assert not path.exists()


def test_keep_reports_leaves_file(tmp_path: Path) -> None:
    path = _write(tmp_path, sarif_document())

    ReportParser(keep_reports=True).parse(path, IDENTITY)

    assert path.exists()
