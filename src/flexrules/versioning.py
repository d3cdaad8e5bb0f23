# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for extracting and comparing flex versions."""

from __future__ import annotations

import re
from pathlib import PurePath

from packaging.version import InvalidVersion, Version


def split_executable_name(executable: str | PurePath) -> tuple[str, str]:
    """Split the file name of ``executable`` at its first dot.

    ``win_flex.exe`` becomes ``("win_flex", ".exe")`` and ``flex`` becomes
    ``("flex", "")``.
    """

    name = PurePath(executable).name
    stem, dot, ext = name.partition(".")
    return stem, f"{dot}{ext}"


def extract_flex_version(output: str, executable: str | PurePath) -> str:
    """Return the version token reported in a ``flex --version`` banner.

    Older releases print ``/full/path/to/flex version X.Y`` while newer ones
    print ``flex X.Y``. The token must start with a digit and directly follow
    the executable's name, optionally preceded by the word ``version``.

    Args:
        output: Captured stdout of the version probe.
        executable: Path of the probed executable.

    Returns:
        str: The version token, or an empty string when the banner does not match.
    """

    stem, ext = split_executable_name(executable)
    if not stem:
        return ""
    suffix = f"(?:{re.escape(ext)})?" if ext else ""
    pattern = re.compile(
        rf'^.*{re.escape(stem)}{suffix}"? (?:version )?([0-9]+\S*)(?:\s.*)?$',
        re.DOTALL,
    )
    match = pattern.match(output.rstrip())
    return match.group(1) if match else ""


def parse_version(raw: str | None) -> Version | None:
    """Return ``raw`` as a comparable :class:`Version`, or ``None`` when invalid."""

    if not raw:
        return None
    try:
        return Version(raw)
    except InvalidVersion:
        return None


def is_compatible(actual: str | None, expected: str | None, *, exact: bool = False) -> bool:
    """Return ``True`` when ``actual`` satisfies the ``expected`` version request.

    Args:
        actual: Detected version string.
        expected: Requested minimum (or exact) version, ``None`` for no request.
        exact: Require equality instead of a minimum.

    Returns:
        bool: ``True`` when no version was requested or the request is satisfied.
    """

    if expected is None:
        return True
    actual_version = parse_version(actual)
    expected_version = parse_version(expected)
    if actual_version is None or expected_version is None:
        return False
    if exact:
        return actual_version == expected_version
    return actual_version >= expected_version


__all__ = ["extract_flex_version", "is_compatible", "parse_version", "split_executable_name"]
