# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse detekt SARIF reports into zero-based diagnostics."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.models import Diagnostic, TargetIdentity
from ..core.severity import severity_from_sarif
from ..errors import ReportMalformedError, ReportUnreadableError

LOGGER = logging.getLogger(__name__)


class _SarifModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SarifRegion(_SarifModel):
    """One-based region of a SARIF physical location."""

    start_line: int = Field(alias="startLine", ge=1)
    end_line: int | None = Field(default=None, alias="endLine", ge=1)
    start_column: int = Field(default=1, alias="startColumn", ge=1)
    end_column: int | None = Field(default=None, alias="endColumn", ge=1)


class SarifPhysicalLocation(_SarifModel):
    region: SarifRegion


class SarifLocation(_SarifModel):
    physical_location: SarifPhysicalLocation = Field(alias="physicalLocation")


class SarifMessage(_SarifModel):
    text: str


class SarifResult(_SarifModel):
    """Single finding reported by detekt."""

    message: SarifMessage
    locations: list[SarifLocation] = Field(min_length=1)
    rule_id: str | None = Field(default=None, alias="ruleId")
    level: str | None = None


class SarifRun(_SarifModel):
    results: list[SarifResult]


class SarifLog(_SarifModel):
    """Top level SARIF document; detekt emits exactly one run."""

    runs: list[SarifRun] = Field(min_length=1)


def _to_diagnostic(result: SarifResult, identity: TargetIdentity) -> Diagnostic:
    region = result.locations[0].physical_location.region
    end_line = region.end_line if region.end_line is not None else region.start_line
    end_column = region.end_column if region.end_column is not None else region.start_column
    return Diagnostic(
        identity=identity,
        start_line=region.start_line - 1,
        end_line=end_line - 1,
        start_column=region.start_column - 1,
        end_column=end_column - 1,
        message=result.message.text,
        rule_id=result.rule_id,
        severity=severity_from_sarif(result.level),
    )


def parse_report(payload: str | bytes, identity: TargetIdentity, *, source: Path) -> list[Diagnostic]:
    """Convert SARIF ``payload`` into diagnostics in report order.

    Only the first run is read. Additional runs are outside what detekt
    produces and are ignored.

    Args:
        payload: Raw SARIF document.
        identity: Target the diagnostics belong to.
        source: Path the payload was read from, used in error messages.

    Returns:
        list[Diagnostic]: One diagnostic per result, possibly empty.

    Raises:
        ReportMalformedError: If the payload is not JSON or lacks a run.
    """

    try:
        log = SarifLog.model_validate_json(payload)
    except ValidationError as exc:
        raise ReportMalformedError(source, _summarise(exc)) from exc
    if len(log.runs) > 1:
        LOGGER.debug("report %s holds %d runs; reading the first", source, len(log.runs))
    return [_to_diagnostic(result, identity) for result in log.runs[0].results]


def _summarise(exc: ValidationError) -> str:
    """Return the first validation error of ``exc`` as ``"<loc>: <msg>"``.

    Args:
        exc: Validation failure raised while reading a SARIF document.

    Returns:
        str: Dotted location of the offending field and pydantic's message.
    """

    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<document>"
    return f"{location}: {first.get('msg', 'invalid')}"


class ReportParser:
    """Read detekt's SARIF report from its scratch file."""

    def __init__(self, *, keep_reports: bool = False) -> None:
        self._keep_reports = keep_reports

    def parse(self, scratch_path: Path, identity: TargetIdentity) -> list[Diagnostic]:
        """Read and parse the report at ``scratch_path``.

        Callers check the exit code first: a missing report is expected when
        detekt failed before writing it.

        Raises:
            ReportUnreadableError: If the file cannot be opened or is still
                empty.
            ReportMalformedError: If the contents are not a one-run SARIF log.
        """

        try:
            try:
                payload = scratch_path.read_bytes()
            except OSError as exc:
                raise ReportUnreadableError(scratch_path) from exc
            # The scratch file is reserved empty; detekt never wrote to it.
            if not payload.strip():
                raise ReportUnreadableError(scratch_path)
            return parse_report(payload, identity, source=scratch_path)
        finally:
            if not self._keep_reports:
                self.cleanup(scratch_path)

    @staticmethod
    def cleanup(scratch_path: Path) -> None:
        """Remove ``scratch_path`` if it still exists."""

        try:
            scratch_path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.debug("could not remove %s: %s", scratch_path, exc)


__all__ = ["ReportParser", "SarifLog", "SarifRegion", "SarifResult", "parse_report"]
