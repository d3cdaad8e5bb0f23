# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console reporting of locator outcomes."""

from __future__ import annotations

from pathlib import Path

from flexrules.logging import found_message, report_found, report_not_found, report_probe_failure
from flexrules.models import FlexPackage, ToolLocation, VersionProbe


def test_found_message_variants(flex_package: FlexPackage) -> None:
    assert found_message(flex_package) == 'Found FLEX: /opt/flex/bin/flex (found version "2.6.4")'
    assert found_message(flex_package, "2.6") == (
        'Found FLEX: /opt/flex/bin/flex (found suitable version "2.6.4", minimum required is "2.6")'
    )
    assert found_message(flex_package, "2.6.4", exact=True) == (
        'Found FLEX: /opt/flex/bin/flex (found exact version "2.6.4", required is exact "2.6.4")'
    )


def test_found_message_without_version() -> None:
    package = FlexPackage(found=True, location=ToolLocation(executable=Path("/usr/bin/flex")))

    assert found_message(package, "2.6") == "Found FLEX: /usr/bin/flex"


def test_report_found_prints_notes(capsys) -> None:
    package = FlexPackage(
        found=True,
        location=ToolLocation(executable=Path("/usr/bin/flex")),
        notes=("Version of /usr/bin/flex could not be determined",),
    )

    report_found(package, "2.6", use_emoji=False)

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Found FLEX: /usr/bin/flex", "Version of /usr/bin/flex could not be determined"]


def test_report_not_found_prints_reason(capsys) -> None:
    package = FlexPackage(found=False, notes=("Could NOT find FLEX (missing: FLEX_EXECUTABLE)",))

    report_not_found(package, use_emoji=True)

    out = capsys.readouterr().out
    assert "⚠️" in out
    assert "Could NOT find FLEX (missing: FLEX_EXECUTABLE)" in out


def test_report_probe_failure_includes_streams(capsys) -> None:
    probe = VersionProbe(command=("/usr/bin/flex", "--version"), returncode=2, stdout="out", stderr="err")

    report_probe_failure(probe, use_emoji=False)

    out = capsys.readouterr().out
    assert 'Command "/usr/bin/flex --version" failed with output:' in out
    assert "FLEX_VERSION will not be available" in out
