# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from functools import cache

from rich.console import Console
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def get_console(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Return a Rich console configured for the requested presentation flags.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        stderr: ``True`` to write to standard error instead of standard output.

    Returns:
        Console: Console shared by every caller asking for the same flags.
    """

    return Console(
        color_system="auto" if color else None,
        no_color=not color,
        emoji=emoji,
        soft_wrap=True,
        stderr=stderr,
        highlight=False,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise ``""``."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, use_color: bool | None, stderr: bool = False) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message to standard error."""

    _print_line(
        f"{emoji('⚠️ ', use_emoji)}{msg}",
        style="yellow",
        use_emoji=use_emoji,
        use_color=use_color,
        stderr=True,
    )


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message to standard error."""

    _print_line(
        f"{emoji('❌ ', use_emoji)}{msg}",
        style="red",
        use_emoji=use_emoji,
        use_color=use_color,
        stderr=True,
    )


__all__ = ["detect_tty", "emoji", "fail", "get_console", "info", "ok", "warn"]
