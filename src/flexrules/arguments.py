# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keyword-style argument parsing for rule declarations.

Build descriptions pass options as a flat list such as
``["COMPILE_FLAGS", "-Cem", "DEFINES_FILE", "lexer.h"]``. The parser sorts
that list into boolean options, single-value and multi-value keywords, and
keeps every token it could not place so callers can reject them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field


@dataclass(slots=True)
class ParsedArguments:
    """Outcome of :func:`parse_keyword_arguments`."""

    options: dict[str, bool] = field(default_factory=dict)
    single: dict[str, str] = field(default_factory=dict)
    multi: dict[str, list[str]] = field(default_factory=dict)
    unparsed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unparsed


def parse_keyword_arguments(
    args: Sequence[str],
    *,
    options: Iterable[str] = (),
    single_value: Iterable[str] = (),
    multi_value: Iterable[str] = (),
) -> ParsedArguments:
    """Split ``args`` into keyword buckets.

    A single-value keyword consumes the next token unless that token is itself
    a keyword; a repeated keyword keeps its last value. Tokens that appear
    before any keyword, or after a single-value keyword already took its
    value, land in ``unparsed``.

    Args:
        args: Flat argument list.
        options: Keywords that take no value.
        single_value: Keywords that take exactly one value.
        multi_value: Keywords that collect every following non-keyword token.

    Returns:
        ParsedArguments: Parsed keyword values plus unparsed leftovers.
    """

    option_names = frozenset(options)
    single_names = frozenset(single_value)
    multi_names = frozenset(multi_value)
    keywords = option_names | single_names | multi_names

    parsed = ParsedArguments(options={name: False for name in option_names})
    current: str | None = None
    consumed = False
    for token in args:
        if token in keywords:
            if token in option_names:
                parsed.options[token] = True
                current = None
            else:
                current = token
                consumed = False
                if token in multi_names:
                    parsed.multi.setdefault(token, [])
                else:
                    parsed.single.pop(token, None)
            continue
        if current in single_names and not consumed:
            parsed.single[current] = token
            consumed = True
        elif current in multi_names:
            parsed.multi[current].append(token)
        else:
            parsed.unparsed.append(token)
    return parsed


__all__ = ["ParsedArguments", "parse_keyword_arguments"]
