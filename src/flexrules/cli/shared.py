# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (errors, rendering)."""

from __future__ import annotations

import json
from collections.abc import Mapping

import typer
from rich import box
from rich.table import Table

from ..logging import fail
from ..models import FlexPackage, PublishedValue

EXIT_NOT_FOUND = 1
EXIT_USAGE = 2


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def abort(exc: CLIError, *, use_emoji: bool) -> typer.Exit:
    """Report ``exc`` and return the matching :class:`typer.Exit` to raise."""

    fail(str(exc), use_emoji=use_emoji)
    return typer.Exit(code=exc.exit_code)


def render_json(payload: Mapping[str, object]) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


def _format_value(value: PublishedValue) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, list):
        return ";".join(value) or "-"
    return value or "-"


def build_variables_table(title: str, variables: Mapping[str, PublishedValue]) -> Table:
    """Return a two-column table of published variables."""

    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("Variable", style="bold")
    table.add_column("Value", overflow="fold")
    for name, value in variables.items():
        table.add_row(name, _format_value(value))
    return table


def build_package_table(package: FlexPackage) -> Table:
    """Return the locator summary table, including probe details when it failed."""

    table = build_variables_table("flex", package.variables())
    probe = package.probe
    if probe is not None and not probe.ok:
        table.add_row("probe", f"[red]exit {probe.returncode}[/]")
        table.add_row("stdout", probe.stdout or "-")
        table.add_row("stderr", probe.stderr or "-")
    for note in package.notes:
        table.add_row("note", f"[yellow]{note}[/]")
    return table


__all__ = [
    "EXIT_NOT_FOUND",
    "EXIT_USAGE",
    "CLIError",
    "abort",
    "build_package_table",
    "build_variables_table",
    "render_json",
]
