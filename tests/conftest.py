# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from flexrules.models import FlexPackage, ToolLocation


def write_executable(path: Path, body: str) -> Path:
    """Write a POSIX shell script to ``path`` and mark it executable."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def make_tool(bin_dir: Path) -> Callable[..., Path]:
    """Return a factory creating fake executables inside ``bin_dir``."""

    def factory(name: str = "flex", body: str = 'echo "flex 2.6.4"', directory: Path | None = None) -> Path:
        return write_executable((directory or bin_dir) / name, body)

    return factory


@pytest.fixture
def flex_package() -> FlexPackage:
    return FlexPackage(
        found=True,
        location=ToolLocation(executable=Path("/opt/flex/bin/flex")),
        version="2.6.4",
    )
