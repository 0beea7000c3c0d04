# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for upward config and baseline discovery."""

from __future__ import annotations

from pathlib import Path

from pydetekt.config import DetektSettings
from pydetekt.discovery import ConfigLocator, find_upward, matches_trigger_pattern, select_targets


def test_find_upward_returns_nearest_match(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)
    (tmp_path / "detekt.yml").write_text("", encoding="utf-8")
    (tmp_path / "a" / "detekt.yml").write_text("", encoding="utf-8")

    result = find_upward(nested, ["detekt.yaml", "detekt.yml"])

    assert result.found
    assert result.path == tmp_path / "a" / "detekt.yml"
    assert result.matched_name == "detekt.yml"
    assert result.start == nested


def test_find_upward_includes_start_directory(tmp_path: Path) -> None:
    (tmp_path / "detekt.yaml").write_text("", encoding="utf-8")

    result = find_upward(tmp_path, ["detekt.yaml"])

    assert result.path == tmp_path / "detekt.yaml"


def test_find_upward_prefers_earlier_name_in_same_directory(tmp_path: Path) -> None:
    (tmp_path / "detekt.yaml").write_text("", encoding="utf-8")
    (tmp_path / "detekt.yml").write_text("", encoding="utf-8")

    result = find_upward(tmp_path, ["detekt.yml", "detekt.yaml"])

    assert result.matched_name == "detekt.yml"


def test_find_upward_ignores_directories_with_candidate_name(tmp_path: Path) -> None:
    start = tmp_path / "src"
    (start / "detekt.yml").mkdir(parents=True)

    result = find_upward(start, ["detekt.yml-does-not-exist", "detekt.yml"])

    assert result.path != start / "detekt.yml"


def test_find_upward_absent(tmp_path: Path) -> None:
    result = find_upward(tmp_path, ["no-such-config-3f9a.yml"])

    assert not result.found
    assert result.path is None
    assert result.searched_names == ("no-such-config-3f9a.yml",)


def test_locator_baseline_disabled_by_default(tmp_path: Path) -> None:
    locator = ConfigLocator(DetektSettings())

    assert not locator.baseline_enabled
    assert locator.locate_baseline(tmp_path) is None


def test_locator_baseline_search(tmp_path: Path) -> None:
    (tmp_path / "baseline.xml").write_text("<SmellBaseline/>", encoding="utf-8")
    locator = ConfigLocator(DetektSettings(baseline_names=["baseline.xml"]))

    result = locator.locate_baseline(tmp_path)

    assert result is not None
    assert result.path == tmp_path / "baseline.xml"


def test_trigger_pattern_matching() -> None:
    assert matches_trigger_pattern(Path("/proj/src/Main.kt"), ("*.kt",))
    assert not matches_trigger_pattern(Path("/proj/build.gradle.kts"), ("*.kt",))
    assert matches_trigger_pattern(Path("/proj/build.gradle.kts"), ("*.kt", "*.kts"))
    assert matches_trigger_pattern(Path("/proj/src/Main.kt"), ("*/src/*.kt",))


def test_select_targets_expands_directories(project: Path) -> None:
    (project / "README.md").write_text("docs", encoding="utf-8")

    targets = select_targets([project], ("*.kt",))

    assert targets == [(project / "src" / "main" / "kotlin" / "Main.kt").absolute()]
