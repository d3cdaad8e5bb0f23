# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the locate and target commands."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import load_config
from ..errors import ConfigError, RuleRegistrationError, ToolNotFoundError, VersionProbeError
from ..locator import Locator
from ..logging import get_console
from ..models import FlexPackage
from ..rules import RuleRegistry
from .shared import EXIT_NOT_FOUND, EXIT_USAGE, CLIError, abort, build_package_table, build_variables_table, render_json

app = typer.Typer(
    help="Locate flex and preview the generation rules declared with it.",
    no_args_is_help=True,
    add_completion=False,
)

RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root holding pyproject.toml.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in console output.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print published variables as JSON.")]


def _locate(root: Path, overrides: dict[str, Any], *, use_emoji: bool) -> FlexPackage:
    try:
        config = load_config(root.resolve(), overrides=overrides)
        return Locator(config, use_emoji=use_emoji).locate()
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=EXIT_USAGE) from exc
    except (ToolNotFoundError, VersionProbeError) as exc:
        raise CLIError(str(exc), exit_code=EXIT_NOT_FOUND) from exc


@app.command("locate")
def locate_command(
    root: RootOption = Path("."),
    required: Annotated[bool, typer.Option("--required", help="Fail when flex is missing.")] = False,
    min_version: Annotated[str | None, typer.Option("--min-version", help="Minimum acceptable version.")] = None,
    exact: Annotated[bool, typer.Option("--exact", help="Require exactly --min-version.")] = False,
    as_json: JsonOption = False,
    emoji: EmojiOption = True,
) -> None:
    """Run the locator and show the published FLEX_* variables."""

    overrides: dict[str, Any] = {"min_version": min_version}
    if required:
        overrides["required"] = True
    if exact:
        overrides["exact"] = True
    if as_json:
        overrides["quiet"] = True
    try:
        package = _locate(root, overrides, use_emoji=emoji)
    except CLIError as exc:
        raise abort(exc, use_emoji=emoji) from exc

    if as_json:
        render_json(package.variables())
    else:
        console = get_console(emoji=emoji)
        console.print(build_package_table(package))
    if not package.found:
        raise typer.Exit(code=EXIT_NOT_FOUND)


@app.command("target")
def target_command(
    name: Annotated[str, typer.Argument(help="Rule name.")],
    input: Annotated[Path, typer.Argument(help="Flex grammar file.")],
    output: Annotated[Path, typer.Argument(help="Generated scanner source.")],
    compile_flags: Annotated[str | None, typer.Option("--compile-flags", help="Extra flex flags.")] = None,
    defines_file: Annotated[Path | None, typer.Option("--defines-file", help="Generated header path.")] = None,
    source_dir: Annotated[
        Path | None,
        typer.Option("--source-dir", help="Working directory of the declared command."),
    ] = None,
    root: RootOption = Path("."),
    as_json: JsonOption = False,
    emoji: EmojiOption = True,
) -> None:
    """Declare one flex rule and print the command it would run."""

    try:
        package = _locate(root, {"required": True, "quiet": True}, use_emoji=emoji)
        registry = RuleRegistry(package, source_dir=source_dir or root.resolve())
        rule = registry.flex_target(name, input, output, compile_flags=compile_flags, defines_file=defines_file)
    except CLIError as exc:
        raise abort(exc, use_emoji=emoji) from exc
    except RuleRegistrationError as exc:
        raise abort(CLIError(str(exc), exit_code=EXIT_USAGE), use_emoji=emoji) from exc

    if as_json:
        payload: dict[str, object] = dict(rule.variables())
        payload["command"] = list(rule.command.command)
        payload["working_directory"] = str(rule.command.working_directory)
        render_json(payload)
        return
    console = get_console(emoji=emoji)
    console.print(build_variables_table(f"flex target {name}", rule.variables()))
    typer.echo(shlex.join(rule.command.command))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
