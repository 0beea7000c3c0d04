# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Select the files a detekt run should be triggered for."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
from pathlib import Path


def matches_trigger_pattern(path: Path, patterns: Sequence[str]) -> bool:
    """Return ``True`` when ``path`` matches any glob in ``patterns``.

    Patterns containing a separator are matched against the full POSIX path;
    others against the file name only, so ``*.kt`` matches at any depth.
    """

    posix = path.as_posix()
    return any(fnmatch(posix if "/" in pattern else path.name, pattern) for pattern in patterns)


def select_targets(paths: Iterable[Path], patterns: Sequence[str]) -> list[Path]:
    """Expand directories and keep the files matching ``patterns``.

    Args:
        paths: Files or directories supplied by the caller.
        patterns: Trigger globs from the settings.

    Returns:
        list[Path]: Matching files, de-duplicated, in discovery order.
    """

    selected: dict[Path, None] = {}
    for path in paths:
        candidates = sorted(p for p in path.rglob("*") if p.is_file()) if path.is_dir() else [path]
        for candidate in candidates:
            if matches_trigger_pattern(candidate, patterns):
                selected.setdefault(candidate.absolute(), None)
    return list(selected)


__all__ = ["matches_trigger_pattern", "select_targets"]
