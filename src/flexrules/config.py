# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locator configuration with layered loading from defaults, pyproject and environment."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "flexrules"

# Environment variables that pre-seed a location, bypassing the search.
ENV_OVERRIDES: Final[Mapping[str, str]] = {
    "FLEX_EXECUTABLE": "executable",
    "FL_LIBRARY": "library",
    "FLEX_INCLUDE_DIR": "include_dir",
}

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class LocatorConfig(BaseModel):
    """Settings controlling how flex and its runtime pieces are located."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    executable: Path | None = None
    library: Path | None = None
    include_dir: Path | None = None
    executable_names: tuple[str, ...] = ("flex", "win_flex")
    library_names: tuple[str, ...] = ("fl",)
    header_name: str = "FlexLexer.h"
    hints: tuple[Path, ...] = ()
    min_version: str | None = None
    exact: bool = False
    required: bool = False
    quiet: bool = False
    probe_timeout: float | None = Field(default=30.0, ge=0)

    @field_validator("executable_names", "library_names")
    @classmethod
    def _non_empty_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or not all(name.strip() for name in value):
            raise ValueError("names must be a non-empty list of non-blank strings")
        return value

    @field_validator("min_version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("min_version")
    @classmethod
    def _valid_version(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            Version(value)
        except InvalidVersion as exc:
            raise ValueError(f"min_version {value!r} is not a valid version") from exc
        return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _expand_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {key: _expand_env(entry, env) for key, entry in value.items()}
    if isinstance(value, list):
        return [_expand_env(entry, env) for entry in value]
    return value


def _resolve_relative(data: dict[str, Any], root: Path) -> dict[str, Any]:
    for key in ("executable", "library", "include_dir"):
        raw = data.get(key)
        if isinstance(raw, str) and ("/" in raw or os.sep in raw) and not Path(raw).is_absolute():
            data[key] = str(root / raw)
    hints = data.get("hints")
    if isinstance(hints, list):
        data["hints"] = [entry if Path(entry).is_absolute() else str(root / entry) for entry in hints]
    return data


def load_pyproject_section(path: Path, env: Mapping[str, str]) -> dict[str, Any]:
    """Return the ``[tool.flexrules]`` table of ``path`` with ``$VAR`` references expanded.

    Raises:
        ConfigError: If the document cannot be parsed or the section is not a table.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return _resolve_relative(_expand_env(dict(section), env), path.parent)


def load_config(
    root: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> LocatorConfig:
    """Build a :class:`LocatorConfig` from defaults, ``pyproject.toml``, environment and overrides.

    Later layers win: the pyproject table replaces defaults, ``FLEX_EXECUTABLE``
    style environment variables replace the table, and explicit ``overrides``
    replace everything.

    Args:
        root: Project directory holding ``pyproject.toml``; ``None`` skips the file.
        env: Environment mapping; defaults to ``os.environ``.
        overrides: Explicit field values supplied by the caller.

    Returns:
        LocatorConfig: Validated configuration.

    Raises:
        ConfigError: When any layer holds invalid data.
    """

    env = os.environ if env is None else env
    data: dict[str, Any] = {}
    if root is not None:
        data.update(load_pyproject_section(root / PYPROJECT_FILE, env))
    for variable, field in ENV_OVERRIDES.items():
        value = env.get(variable)
        if value:
            data[field] = value
    data.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        return LocatorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid flexrules configuration: {exc}") from exc


__all__ = [
    "ENV_OVERRIDES",
    "PYPROJECT_SECTION_KEY",
    "LocatorConfig",
    "load_config",
    "load_pyproject_section",
]
