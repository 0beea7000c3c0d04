# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed settings controlling how detekt is located and invoked."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import SettingsError

DEFAULT_CONFIG_NAMES: Final[tuple[str, ...]] = ("detekt.yaml", "detekt.yml")
DEFAULT_EXECUTABLE: Final[str] = "detekt"
DEFAULT_FILE_PATTERNS: Final[tuple[str, ...]] = ("*.kt",)


class NotifyLevel(IntEnum):
    """Threshold for user-facing notifications, lowest to highest."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    NONE = 5

    @classmethod
    def from_raw(cls, raw: str | int) -> NotifyLevel:
        """Return the level matching a name (``"warn"``) or a number.

        Args:
            raw: Level name, case insensitive, or its integer value.

        Returns:
            NotifyLevel: Matching level.

        Raises:
            ValueError: If ``raw`` does not name a level.
        """

        if isinstance(raw, int):
            return cls(raw)
        try:
            return cls[raw.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"unknown notification level '{raw}'") from exc


class DetektSettings(BaseModel):
    """Settings consumed by the command cache, runner and notifier."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    config_names: tuple[str, ...] = DEFAULT_CONFIG_NAMES
    baseline_names: tuple[str, ...] | None = None
    build_upon_default_config: bool = True
    executable: str = Field(
        default=DEFAULT_EXECUTABLE,
        validation_alias=AliasChoices("executable", "detekt_exec"),
    )
    trigger_file_pattern: tuple[str, ...] = Field(
        default=DEFAULT_FILE_PATTERNS,
        validation_alias=AliasChoices("trigger_file_pattern", "file_pattern"),
    )
    log_level: NotifyLevel = NotifyLevel.INFO
    keep_reports: bool = False
    max_workers: int = Field(default=4, ge=1)

    @field_validator("config_names", "baseline_names", "trigger_file_pattern", mode="before")
    @classmethod
    def _coerce_names(cls, value: object) -> object:
        """Accept a bare string wherever a list of names is expected."""

        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("config_names", "trigger_file_pattern")
    @classmethod
    def _require_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one entry is required")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_level(cls, value: object) -> object:
        if isinstance(value, (str, int)) and not isinstance(value, NotifyLevel):
            return NotifyLevel.from_raw(value)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping suitable for display or serialisation."""

        payload = self.model_dump()
        payload["log_level"] = self.log_level.name.lower()
        return payload


def merge_settings(base: DetektSettings, overrides: Mapping[str, Any] | DetektSettings | None) -> DetektSettings:
    """Return ``base`` with only the explicitly supplied fields replaced.

    Only keys present in ``overrides`` take effect, so falsy values such as
    ``build_upon_default_config=False`` are honoured rather than treated as
    unset. ``None`` for ``baseline_names`` is an explicit value as well and
    disables the baseline search.

    Args:
        base: Settings providing the fallback values.
        overrides: Partial mapping or settings model. For a model, only the
            fields that were set when it was constructed are applied.

    Returns:
        DetektSettings: Merged settings.

    Raises:
        SettingsError: If ``overrides`` contains unknown keys or invalid values.
    """

    if overrides is None:
        return base
    if isinstance(overrides, DetektSettings):
        parsed = overrides
    else:
        try:
            parsed = DetektSettings.model_validate(dict(overrides))
        except ValidationError as exc:
            raise SettingsError(f"invalid detekt settings: {exc}") from exc
    if not parsed.model_fields_set:
        return base
    update = {name: getattr(parsed, name) for name in parsed.model_fields_set}
    return base.model_copy(update=update)


__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "DEFAULT_EXECUTABLE",
    "DEFAULT_FILE_PATTERNS",
    "DetektSettings",
    "NotifyLevel",
    "merge_settings",
]
