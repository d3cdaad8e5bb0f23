# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting of locator outcomes, rendered through Rich."""

from __future__ import annotations

import sys
from functools import cache
from typing import Final

from rich.console import Console
from rich.text import Text

from .models import FlexPackage, VersionProbe

PACKAGE_NAME: Final[str] = "FLEX"

_MARKERS: Final[dict[str, str]] = {
    "green": "✅ ",
    "yellow": "⚠️ ",
    "red": "❌ ",
}


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def _build_console(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color and tty else None,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def get_console(*, emoji: bool = True, color: bool | None = None) -> Console:
    """Return a shared console; ``color`` defaults to whether stdout is a TTY."""

    tty = detect_tty()
    return _build_console(tty if color is None else color, emoji, tty)


def _emit(msg: str, *, style: str, use_emoji: bool) -> None:
    text = Text(f"{_MARKERS[style] if use_emoji else ''}{msg}")
    console = get_console(emoji=use_emoji)
    if not console.no_color:
        text.stylize(style)
    console.print(text)


def fail(msg: str, *, use_emoji: bool = True) -> None:
    """Emit an error line."""

    _emit(msg, style="red", use_emoji=use_emoji)


def version_request(min_version: str, *, exact: bool) -> str:
    kind = "exact version" if exact else "at least version"
    return f'(Required is {kind} "{min_version}")'


def found_message(package: FlexPackage, min_version: str | None = None, *, exact: bool = False) -> str:
    """Return the ``Found FLEX: ...`` line for a located ``package``.

    The version clause names the request when one was made, for example
    ``Found FLEX: /usr/bin/flex (found suitable version "2.6.4", minimum
    required is "2.6")``.
    """

    message = f"Found {PACKAGE_NAME}: {package.executable}"
    if package.version and min_version:
        if exact:
            return f'{message} (found exact version "{package.version}", required is exact "{min_version}")'
        return f'{message} (found suitable version "{package.version}", minimum required is "{min_version}")'
    if package.version:
        return f'{message} (found version "{package.version}")'
    return message


def report_found(
    package: FlexPackage,
    min_version: str | None = None,
    *,
    exact: bool = False,
    use_emoji: bool = True,
) -> None:
    """Print the found line followed by each note attached to ``package``."""

    _emit(found_message(package, min_version, exact=exact), style="green", use_emoji=use_emoji)
    for note in package.notes:
        _emit(note, style="yellow", use_emoji=use_emoji)


def report_not_found(package: FlexPackage, *, use_emoji: bool = True) -> None:
    """Print why ``package`` was rejected (missing executable or unsuitable version)."""

    for note in package.notes:
        _emit(note, style="yellow", use_emoji=use_emoji)


def report_probe_failure(probe: VersionProbe, *, use_emoji: bool = True) -> None:
    """Print the failed ``--version`` command with its captured output."""

    _emit(f"{probe.diagnostic}\n{PACKAGE_NAME}_VERSION will not be available", style="yellow", use_emoji=use_emoji)


__all__ = [
    "detect_tty",
    "fail",
    "found_message",
    "get_console",
    "report_found",
    "report_not_found",
    "report_probe_failure",
    "version_request",
]
