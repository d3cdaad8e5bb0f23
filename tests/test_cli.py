# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the locate and target commands."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from subprocess import CompletedProcess

import pytest
from typer.testing import CliRunner

from flexrules.cli.app import app
from flexrules.config import ENV_OVERRIDES

pytestmark = pytest.mark.skipif(sys.platform.startswith("win"), reason="relies on POSIX executable bits")


@pytest.fixture
def fake_path(monkeypatch, bin_dir: Path) -> Path:
    for variable in ENV_OVERRIDES:
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def fake_version(monkeypatch) -> Callable[[str], None]:
    def install(banner: str) -> None:
        def fake_capture_output(args, **kwargs):  # noqa: ANN001
            return CompletedProcess(args=list(args), returncode=0, stdout=banner, stderr="")

        monkeypatch.setattr("flexrules.locator.capture_output", fake_capture_output)

    return install


def test_locate_json_reports_found(fake_path: Path, make_tool, fake_version, tmp_path: Path) -> None:
    flex = make_tool("flex")
    fake_version("flex 2.6.4\n")

    result = CliRunner().invoke(app, ["locate", "--root", str(tmp_path), "--json"])

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["FLEX_FOUND"] is True
    assert payload["FLEX_EXECUTABLE"] == str(flex.absolute())
    assert payload["FLEX_VERSION"] == "2.6.4"


def test_locate_table_when_missing(fake_path: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["locate", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "FLEX_FOUND" in result.stdout
    assert "FALSE" in result.stdout


def test_locate_required_failure(fake_path: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["locate", "--root", str(tmp_path), "--required", "--no-emoji"])

    assert result.exit_code == 1
    assert "Could NOT find FLEX (missing: FLEX_EXECUTABLE)" in result.stdout


def test_locate_rejects_bad_configuration(fake_path: Path, tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.flexrules]\nunknown = 1\n', encoding="utf-8")

    result = CliRunner().invoke(app, ["locate", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 2
    assert "Invalid flexrules configuration" in result.stdout


def test_target_prints_declared_command(fake_path: Path, make_tool, fake_version, tmp_path: Path) -> None:
    make_tool("flex")
    fake_version("flex 2.6.4")

    result = CliRunner().invoke(
        app,
        [
            "target",
            "Scanner",
            "lexer.l",
            "lexer.cpp",
            "--compile-flags",
            "-Cem",
            "--defines-file",
            "lexer.h",
            "--root",
            str(tmp_path),
            "--no-emoji",
        ],
    )

    assert result.exit_code == 0, result.stdout
    command_line = result.stdout.strip().splitlines()[-1]
    assert command_line.endswith("-Cem --header-file=lexer.h -olexer.cpp lexer.l")


def test_target_json_payload(fake_path: Path, make_tool, fake_version, tmp_path: Path) -> None:
    flex = make_tool("flex")
    fake_version("flex 2.6.4")

    result = CliRunner().invoke(
        app,
        ["target", "Scanner", "lexer.l", "lexer.c", "--root", str(tmp_path), "--json"],
    )

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["FLEX_Scanner_OUTPUTS"] == ["lexer.c"]
    assert payload["FLEX_Scanner_OUTPUT_HEADER"] == ""
    assert payload["command"] == [str(flex.absolute()), "-olexer.c", "lexer.l"]
    assert payload["working_directory"] == str(tmp_path.resolve())


def test_target_requires_flex(fake_path: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["target", "Scanner", "lexer.l", "lexer.c", "--root", str(tmp_path)])

    assert result.exit_code == 1
