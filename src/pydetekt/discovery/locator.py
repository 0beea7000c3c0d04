# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate detekt config and baseline files by searching parent directories."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..config.models import DetektSettings
from ..core.models import ConfigSearchResult

LOGGER = logging.getLogger(__name__)


def _iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` followed by each parent up to the filesystem root."""

    yield start
    yield from start.parents


def find_upward(start: Path, names: Sequence[str]) -> ConfigSearchResult:
    """Search ``start`` and its ancestors for the first file named in ``names``.

    Within a directory the candidates are tried in order, so earlier names take
    precedence over later ones at the same level while a nearer directory
    always beats a farther one.

    Args:
        start: Directory where the search begins (inclusive).
        names: Ordered candidate file names.

    Returns:
        ConfigSearchResult: Matched path and name, or an empty result when no
        candidate exists before the filesystem root.
    """

    searched = tuple(names)
    origin = start.absolute()
    for directory in _iter_ancestors(origin):
        for name in searched:
            candidate = directory / name
            if candidate.is_file():
                LOGGER.debug("found %s in %s", name, directory)
                return ConfigSearchResult(searched_names=searched, start=origin, path=candidate, matched_name=name)
    LOGGER.debug("none of %s found above %s", ", ".join(searched), origin)
    return ConfigSearchResult(searched_names=searched, start=origin)


class ConfigLocator:
    """Bind :func:`find_upward` to the candidate names from the settings."""

    def __init__(self, settings: DetektSettings) -> None:
        self._config_names = settings.config_names
        self._baseline_names = settings.baseline_names

    @property
    def baseline_enabled(self) -> bool:
        """Return ``True`` when baseline names are configured."""

        return self._baseline_names is not None

    def locate_config(self, start: Path) -> ConfigSearchResult:
        """Return the nearest detekt config at or above ``start``."""

        return find_upward(start, self._config_names)

    def locate_baseline(self, start: Path) -> ConfigSearchResult | None:
        """Return the nearest baseline at or above ``start``.

        Returns:
            ConfigSearchResult | None: ``None`` when baselines are disabled.
        """

        if self._baseline_names is None:
            return None
        return find_upward(start, self._baseline_names)


__all__ = ["ConfigLocator", "find_upward"]
