# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Caller-owned registry of flex generation rules and scanner dependencies."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .arguments import parse_keyword_arguments
from .errors import MissingRuleError, RuleRegistrationError, ToolNotFoundError
from .models import (
    HEADER_FLAG_PREFIX,
    OUTPUT_FLAG_PREFIX,
    CustomCommand,
    FlexPackage,
    FlexTargetOptions,
    GenerationRule,
    ParserRule,
    PublishedValue,
    SourceFileProperties,
)

LOGGER = logging.getLogger(__name__)

FLEX_TARGET_USAGE: Final[str] = (
    "FLEX_TARGET(<Name> <Input> <Output> [COMPILE_FLAGS <string>] [DEFINES_FILE <string>])"
)
KEYWORD_FIELDS: Final[dict[str, str]] = {
    "COMPILE_FLAGS": "compile_flags",
    "DEFINES_FILE": "defines_file",
}


def split_compile_flags(raw: str | None) -> list[str]:
    """Tokenize a flag string on whitespace into discrete arguments."""

    if not raw:
        return []
    return raw.split()


def resolve_flags(options: FlexTargetOptions) -> list[str]:
    """Return the final flex flag list for ``options``.

    The header emission flag, when requested, is always the last entry so it
    is never overridden by caller-supplied flags.
    """

    flags = split_compile_flags(options.compile_flags)
    if options.defines_file is not None:
        flags.append(f"{HEADER_FLAG_PREFIX}{options.defines_file}")
    return flags


class RuleRegistry:
    """Hold flex rules, companion parser rules and source properties by name.

    Args:
        flex: Located flex package; declaring rules requires ``flex.found``.
        source_dir: Working directory of every declared command.
    """

    def __init__(self, flex: FlexPackage, *, source_dir: Path | None = None) -> None:
        self._flex = flex
        self._source_dir = (source_dir or Path.cwd()).absolute()
        self._rules: dict[str, GenerationRule] = {}
        self._parser_rules: dict[str, ParserRule] = {}
        self._source_properties: dict[Path, SourceFileProperties] = {}

    @property
    def flex(self) -> FlexPackage:
        return self._flex

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    @property
    def rules(self) -> dict[str, GenerationRule]:
        return dict(self._rules)

    @property
    def parser_rules(self) -> dict[str, ParserRule]:
        return dict(self._parser_rules)

    @property
    def source_properties(self) -> dict[Path, SourceFileProperties]:
        return dict(self._source_properties)

    @property
    def commands(self) -> list[CustomCommand]:
        return [rule.command for rule in self._rules.values()]

    def get(self, name: str) -> GenerationRule | None:
        return self._rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def flex_target(
        self,
        name: str,
        input: str | Path,
        output: str | Path,
        *args: str,
        options: FlexTargetOptions | None = None,
        **kwargs: Any,
    ) -> GenerationRule:
        """Declare the generation of ``output`` from ``input`` under ``name``.

        Options come either as keyword-style ``args``
        (``"COMPILE_FLAGS", "-Cem", "DEFINES_FILE", "lexer.h"``), as
        ``compile_flags=``/``defines_file=`` keywords, or as an explicit
        :class:`FlexTargetOptions`. Declaring a name again replaces the
        earlier rule.

        Args:
            name: Rule name used to look the rule up later.
            input: Flex grammar file.
            output: Primary generated source file.
            *args: Keyword-style option list.
            options: Pre-built options; cannot be combined with ``args`` or ``kwargs``.
            **kwargs: Option fields by name.

        Returns:
            GenerationRule: The registered rule.

        Raises:
            ToolNotFoundError: If flex was not found.
            RuleRegistrationError: If any argument is unrecognized or malformed.
        """

        if not self._flex.found or self._flex.executable is None:
            raise ToolNotFoundError(f"Cannot declare flex target `{name}': flex was not found")
        if not name:
            raise RuleRegistrationError(FLEX_TARGET_USAGE, detail="rule name must be non-empty")
        resolved = self._resolve_options(args, options, kwargs)

        input_path = Path(input)
        output_path = Path(output)
        flags = resolve_flags(resolved)
        outputs = [output_path]
        if resolved.defines_file is not None:
            outputs.append(resolved.defines_file)

        command = CustomCommand(
            outputs=tuple(outputs),
            command=(str(self._flex.executable), *flags, f"{OUTPUT_FLAG_PREFIX}{output_path}", str(input_path)),
            depends=(input_path,),
            working_directory=self._source_dir,
            comment=f"[FLEX][{name}] Building scanner with flex {self._flex.version}".rstrip(),
        )
        rule = GenerationRule(
            name=name,
            input=input_path,
            outputs=tuple(outputs),
            compile_flags=tuple(flags),
            output_header=resolved.defines_file,
            command=command,
        )
        if name in self._rules:
            LOGGER.warning("flex target `%s' redeclared; replacing the earlier rule", name)
        self._rules[name] = rule
        LOGGER.debug("declared flex target %s: %s", name, shlex.join(command.command))
        return rule

    @staticmethod
    def _resolve_options(
        args: Sequence[str],
        options: FlexTargetOptions | None,
        kwargs: dict[str, Any],
    ) -> FlexTargetOptions:
        if options is not None and (args or kwargs):
            raise RuleRegistrationError(FLEX_TARGET_USAGE, detail="options cannot be combined with extra arguments")
        if options is not None:
            return options

        parsed = parse_keyword_arguments([str(arg) for arg in args], single_value=KEYWORD_FIELDS)
        if not parsed.ok:
            raise RuleRegistrationError(
                FLEX_TARGET_USAGE,
                detail=f"unrecognized arguments: {' '.join(parsed.unparsed)}",
            )
        data: dict[str, Any] = {KEYWORD_FIELDS[key]: value for key, value in parsed.single.items()}
        duplicated = sorted(set(data) & set(kwargs))
        if duplicated:
            raise RuleRegistrationError(FLEX_TARGET_USAGE, detail=f"options given twice: {', '.join(duplicated)}")
        data.update(kwargs)
        try:
            return FlexTargetOptions.model_validate(data)
        except ValidationError as exc:
            unknown = sorted(
                str(error["loc"][0]) for error in exc.errors() if error["type"] == "extra_forbidden" and error["loc"]
            )
            detail = f"unrecognized options: {', '.join(unknown)}" if unknown else str(exc)
            raise RuleRegistrationError(FLEX_TARGET_USAGE, detail=detail) from exc

    def add_parser_rule(
        self,
        name: str,
        *,
        output_header: str | Path | None,
        outputs: Sequence[str | Path] = (),
    ) -> ParserRule:
        """Record a companion parser-generator rule that scanners may depend on."""

        rule = ParserRule(
            name=name,
            output_header=Path(output_header) if output_header else None,
            outputs=tuple(Path(path) for path in outputs),
        )
        self._parser_rules[name] = rule
        return rule

    def add_flex_bison_dependency(self, flex_name: str, bison_name: str) -> SourceFileProperties:
        """Make objects compiled from a scanner depend on a parser's header.

        Regenerating the parser header then forces recompilation of the
        scanner's object file; the scanner itself is not regenerated.

        Args:
            flex_name: Name of a registered flex rule.
            bison_name: Name of a registered parser rule exposing an output header.

        Returns:
            SourceFileProperties: Updated properties of the generated scanner source.

        Raises:
            MissingRuleError: If either rule is undefined; the flex rule is checked first.
        """

        flex_rule = self._rules.get(flex_name)
        if flex_rule is None or not flex_rule.outputs:
            raise MissingRuleError("Flex", flex_name)
        parser_rule = self._parser_rules.get(bison_name)
        if parser_rule is None or parser_rule.output_header is None:
            raise MissingRuleError("Bison", bison_name)

        source = flex_rule.output
        properties = self._source_properties.setdefault(source, SourceFileProperties(path=source))
        properties.add_object_depends(parser_rule.output_header)
        LOGGER.debug("flex target %s now depends on %s", flex_name, parser_rule.output_header)
        return properties

    def variables(self) -> dict[str, PublishedValue]:
        """Return the tool-wide and per-rule state under ``FLEX_*`` names."""

        published = self._flex.variables()
        for rule in self._rules.values():
            published.update(rule.variables())
        return published


__all__ = [
    "FLEX_TARGET_USAGE",
    "RuleRegistry",
    "resolve_flags",
    "split_compile_flags",
]
