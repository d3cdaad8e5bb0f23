# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for flex version banner parsing and comparison."""

from __future__ import annotations

from pathlib import Path

import pytest

from flexrules.versioning import extract_flex_version, is_compatible, split_executable_name


@pytest.mark.parametrize(
    ("output", "executable", "expected"),
    [
        ("flex 2.6.4", "/usr/bin/flex", "2.6.4"),
        ("flex version 2.5.4", "/usr/bin/flex", "2.5.4"),
        ("/usr/bin/flex version 2.5.35", "/usr/bin/flex", "2.5.35"),
        ('"/usr/bin/flex" version 2.5.35 Apple(flex-31)', "/usr/bin/flex", "2.5.35"),
        ("win_flex.exe 2.6.4", "/opt/tools/win_flex.exe", "2.6.4"),
        ("win_flex 2.6.4", "/opt/tools/win_flex.exe", "2.6.4"),
        ("flex 2.6.4\n", "flex", "2.6.4"),
    ],
)
def test_extract_flex_version_accepts_known_banners(output: str, executable: str, expected: str) -> None:
    assert extract_flex_version(output, executable) == expected


def test_extract_flex_version_without_basename_is_empty() -> None:
    assert extract_flex_version("lex 2.6.4", "/usr/bin/flex") == ""


def test_extract_flex_version_requires_leading_digit() -> None:
    assert extract_flex_version("flex unknown", "/usr/bin/flex") == ""


def test_extract_flex_version_ignores_trailing_lines() -> None:
    banner = "flex 2.6.4\nCopyright (C) the flex project"
    assert extract_flex_version(banner, Path("/usr/bin/flex")) == "2.6.4"


def test_split_executable_name_uses_first_dot() -> None:
    assert split_executable_name("/opt/bin/win_flex.exe") == ("win_flex", ".exe")
    assert split_executable_name("flex") == ("flex", "")


def test_is_compatible_minimum_and_exact() -> None:
    assert is_compatible("2.6.4", None)
    assert is_compatible("2.6.4", "2.5.35")
    assert not is_compatible("2.5.4", "2.6")
    assert is_compatible("2.6.4", "2.6.4", exact=True)
    assert not is_compatible("2.6.4", "2.6", exact=True)
    assert not is_compatible("", "2.6")
