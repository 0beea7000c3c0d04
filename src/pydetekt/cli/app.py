# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application running detekt for files named on the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Final

import typer
from rich.pretty import Pretty

from ..config.loader import SettingsLoadResult, load_settings
from ..core.models import RunResult, TargetIdentity
from ..discovery.patterns import select_targets
from ..errors import SettingsError
from ..orchestration import Orchestrator, build_run_context
from ..reporting.notifier import ConsoleNotifier
from ..reporting.sink import render_diagnostics
from .shared import CLIError, CLILogger, build_cli_logger

EXIT_CLEAN: Final[int] = 0
EXIT_FINDINGS: Final[int] = 1
EXIT_FAILURE: Final[int] = 2

app = typer.Typer(help="Run detekt on Kotlin sources and report its findings.", no_args_is_help=True)

RootOption = Annotated[
    Path,
    typer.Option("--root", help="Project root holding pyproject.toml or .pydetekt.toml."),
]
ConfigNameOption = Annotated[
    list[str] | None,
    typer.Option("--config-name", help="Candidate detekt config file name (repeatable)."),
]
BaselineNameOption = Annotated[
    list[str] | None,
    typer.Option("--baseline-name", help="Candidate baseline file name (repeatable)."),
]
BuildUponOption = Annotated[
    bool | None,
    typer.Option(
        "--build-upon-default-config/--no-build-upon-default-config",
        help="Fill settings missing from the config with detekt's defaults.",
    ),
]
ExecutableOption = Annotated[str | None, typer.Option("--executable", help="detekt executable to run.")]
PatternOption = Annotated[
    list[str] | None,
    typer.Option("--pattern", help="Glob selecting files to analyse (repeatable)."),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Lowest notification level shown (trace, debug, info, warn, error, none)."),
]
KeepReportsOption = Annotated[
    bool | None,
    typer.Option("--keep-reports/--no-keep-reports", help="Keep SARIF scratch reports after parsing."),
]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")]


def _collect_overrides(**values: Any) -> dict[str, Any]:
    """Return only the options the user actually supplied."""

    return {key: value for key, value in values.items() if value not in (None, [])}


def _load(root: Path, overrides: dict[str, Any], logger: CLILogger) -> SettingsLoadResult:
    try:
        return load_settings(root.resolve(), overrides=overrides)
    except SettingsError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc), exit_code=EXIT_FAILURE) from exc


def _summarise(results: list[RunResult], logger: CLILogger) -> int:
    exit_code = EXIT_CLEAN
    for result in results:
        if result.error is not None or result.superseded:
            exit_code = EXIT_FAILURE
            continue
        if result.diagnostics:
            render_diagnostics(logger.console, result.diagnostics, title=str(result.identity.path))
            exit_code = max(exit_code, EXIT_FINDINGS)
    if exit_code == EXIT_CLEAN:
        logger.ok(f"{len(results)} file(s) checked, no findings")
    return exit_code


@app.command("check")
def check(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to analyse.")],
    root: RootOption = Path("."),
    config_name: ConfigNameOption = None,
    baseline_name: BaselineNameOption = None,
    build_upon_default_config: BuildUponOption = None,
    executable: ExecutableOption = None,
    pattern: PatternOption = None,
    log_level: LogLevelOption = None,
    keep_reports: KeepReportsOption = None,
    emoji: EmojiOption = False,
) -> None:
    """Run detekt once for every matching file and print the findings."""

    logger = build_cli_logger(emoji=emoji)
    overrides = _collect_overrides(
        config_names=config_name,
        baseline_names=baseline_name,
        build_upon_default_config=build_upon_default_config,
        executable=executable,
        trigger_file_pattern=pattern,
        log_level=log_level,
        keep_reports=keep_reports,
    )
    try:
        settings = _load(root, overrides, logger).settings
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    targets = select_targets(paths, settings.trigger_file_pattern)
    if not targets:
        logger.warn("No files matched " + ", ".join(settings.trigger_file_pattern))
        raise typer.Exit(code=EXIT_CLEAN)

    context = build_run_context(
        settings,
        notifier=ConsoleNotifier(threshold=settings.log_level, use_emoji=emoji),
    )
    orchestrator = Orchestrator(context)
    try:
        futures = [orchestrator.trigger(TargetIdentity(key=str(target), path=target)) for target in targets]
        results = [future.result() for future in futures]
    finally:
        orchestrator.close()
    raise typer.Exit(code=_summarise(results, logger))


@app.command("show-config")
def show_config(
    root: RootOption = Path("."),
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of a pretty view.")] = False,
) -> None:
    """Print the merged settings and the sources they came from."""

    logger = build_cli_logger(emoji=False)
    try:
        loaded = _load(root, {}, logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    payload = {"settings": loaded.settings.to_dict(), "sources": list(loaded.sources)}
    if as_json:
        logger.echo(json.dumps(payload, indent=2))
    else:
        logger.console.print(Pretty(payload))


__all__ = ["app"]
