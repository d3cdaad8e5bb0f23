# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate flex and declare flex generation rules for a build description."""

from __future__ import annotations

from importlib import metadata

from .config import LocatorConfig, load_config
from .errors import (
    ConfigError,
    FlexRulesError,
    MissingRuleError,
    RuleRegistrationError,
    ToolNotFoundError,
    VersionProbeError,
)
from .locator import Locator, find_flex, probe_version
from .models import FlexPackage, FlexTargetOptions, GenerationRule, ParserRule, ToolLocation, VersionProbe
from .rules import RuleRegistry
from .versioning import extract_flex_version

try:
    __version__ = metadata.version("flexrules")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "ConfigError",
    "FlexPackage",
    "FlexRulesError",
    "FlexTargetOptions",
    "GenerationRule",
    "Locator",
    "LocatorConfig",
    "MissingRuleError",
    "ParserRule",
    "RuleRegistrationError",
    "RuleRegistry",
    "ToolLocation",
    "ToolNotFoundError",
    "VersionProbe",
    "VersionProbeError",
    "__version__",
    "extract_flex_version",
    "find_flex",
    "load_config",
    "probe_version",
]
