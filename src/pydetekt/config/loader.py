# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered settings loading from pyproject, ``.pydetekt.toml`` and overrides."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..errors import SettingsError
from .models import DetektSettings, merge_settings

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_SETTINGS_FILENAME: Final[str] = ".pydetekt.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "pydetekt"


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``data`` with TOML-style dashed keys mapped to field names."""

    return {str(key).replace("-", "_"): value for key, value in data.items()}


class TomlSettingsSource:
    """Load settings from a standalone TOML document."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = str(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise SettingsError(f"Failed to parse {self.path}: {exc}") from exc
        except OSError as exc:
            raise SettingsError(f"Failed to read {self.path}: {exc}") from exc

    def load(self) -> Mapping[str, Any]:
        """Return the document's top-level keys with dashes turned into underscores.

        Returns:
            Mapping[str, Any]: Settings overrides, empty when the file is absent.

        Raises:
            SettingsError: If the file exists but cannot be read or parsed.
        """

        return _normalise_keys(self._read())

    def describe(self) -> str:
        """Return a human-readable label for ``show-config`` output."""

        return f"TOML settings at {self.name}"


class PyProjectSettingsSource(TomlSettingsSource):
    """Read settings from ``[tool.pydetekt]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        tool_section = self._read().get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return _normalise_keys(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class SettingsSource(Protocol):
    """Interface implemented by every settings layer."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw settings fragment contributed by this layer."""
        ...

    def describe(self) -> str:
        """Return a human readable description of the layer."""
        ...


class SettingsLoadResult(BaseModel):
    """Resolved settings plus the sources that contributed to them."""

    model_config = ConfigDict(frozen=True)

    settings: DetektSettings
    sources: tuple[str, ...] = Field(default_factory=tuple)


def default_sources(root: Path) -> list[SettingsSource]:
    """Return the file based sources for ``root`` in precedence order.

    Args:
        root: Project directory holding ``pyproject.toml`` / ``.pydetekt.toml``.

    Returns:
        list[SettingsSource]: Sources ordered lowest precedence first.
    """

    return [
        PyProjectSettingsSource(root / PYPROJECT_FILENAME),
        TomlSettingsSource(root / PROJECT_SETTINGS_FILENAME),
    ]


def load_settings(
    root: Path,
    *,
    overrides: Mapping[str, Any] | None = None,
    sources: Sequence[SettingsSource] | None = None,
) -> SettingsLoadResult:
    """Merge defaults, file sources and ``overrides`` into settings.

    Each layer replaces only the keys it defines.

    Args:
        root: Project directory used to locate the default sources.
        overrides: Highest precedence values, typically from the CLI.
        sources: Optional explicit source list replacing :func:`default_sources`.

    Returns:
        SettingsLoadResult: Merged settings and the names of the sources applied.

    Raises:
        SettingsError: If any layer holds unknown keys or invalid values.
    """

    settings = DetektSettings()
    applied: list[str] = []
    for source in sources if sources is not None else default_sources(root):
        fragment = source.load()
        if not fragment:
            continue
        try:
            settings = merge_settings(settings, fragment)
        except SettingsError as exc:
            raise SettingsError(f"{source.describe()}: {exc}") from exc
        applied.append(source.describe())
    if overrides:
        settings = merge_settings(settings, overrides)
        applied.append("overrides")
    return SettingsLoadResult(settings=settings, sources=tuple(applied))


__all__ = [
    "PROJECT_SETTINGS_FILENAME",
    "PyProjectSettingsSource",
    "SettingsLoadResult",
    "TomlSettingsSource",
    "default_sources",
    "load_settings",
]
