# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for capturing tool output."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from flexrules.process import NOT_FOUND_RETURNCODE, TIMEOUT_RETURNCODE, capture_output

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="relies on POSIX shell scripts")


def test_capture_output_requires_arguments() -> None:
    with pytest.raises(ValueError):
        capture_output([])


def test_capture_output_timeout_maps_to_exit_status(monkeypatch) -> None:
    def fake_run(args, **kwargs):  # noqa: ANN001
        raise subprocess.TimeoutExpired(cmd=args, timeout=kwargs["timeout"], output=b"partial", stderr=None)

    monkeypatch.setattr("flexrules.process.subprocess.run", fake_run)

    completed = capture_output(["/usr/bin/flex", "--version"], timeout=1.0)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert completed.stdout == "partial"
    assert completed.stderr == "Command timed out after 1.0s"


def test_capture_output_launch_error_maps_to_exit_status(monkeypatch) -> None:
    def fake_run(args, **kwargs):  # noqa: ANN001
        raise PermissionError("permission denied")

    monkeypatch.setattr("flexrules.process.subprocess.run", fake_run)

    completed = capture_output(["/usr/bin/flex", "--version"])

    assert completed.returncode == NOT_FOUND_RETURNCODE
    assert completed.stdout == ""
    assert "permission denied" in completed.stderr


@posix_only
def test_capture_output_replaces_undecodable_bytes(make_tool: Callable[..., Path]) -> None:
    tool = make_tool("noisy", r"printf 'flex \377\n'; printf 'err \376\n' >&2; exit 3")

    completed = capture_output([str(tool.absolute())])

    assert completed.returncode == 3
    assert completed.stdout == "flex �\n"
    assert completed.stderr == "err �\n"


@posix_only
def test_capture_output_closes_stdin(make_tool: Callable[..., Path]) -> None:
    tool = make_tool("reader", 'read line || echo "no input"')

    completed = capture_output([str(tool.absolute())], timeout=10)

    assert completed.returncode == 0
    assert completed.stdout.strip() == "no input"
