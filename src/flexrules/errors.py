# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the locator and the rule registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import VersionProbe


class FlexRulesError(RuntimeError):
    """Base class for every error raised by :mod:`flexrules`."""


class ConfigError(FlexRulesError):
    """Raised when configuration input is invalid."""


class ToolNotFoundError(FlexRulesError):
    """Raised when a required flex executable is missing or unsuitable."""


class VersionProbeError(FlexRulesError):
    """Raised when ``flex --version`` exits non-zero and flex is required."""

    def __init__(self, probe: VersionProbe) -> None:
        """Initialise the error from the failed probe.

        Args:
            probe: Captured probe result including both output streams.
        """

        super().__init__(probe.diagnostic)
        self.probe = probe


class RuleRegistrationError(FlexRulesError):
    """Raised when a generation rule is declared with malformed arguments."""

    def __init__(self, usage: str, *, detail: str | None = None) -> None:
        """Initialise the error with the expected call signature.

        Args:
            usage: Human-readable call signature shown to the caller.
            detail: Optional description of the offending arguments.
        """

        message = usage if detail is None else f"{usage}: {detail}"
        super().__init__(message)
        self.usage = usage
        self.detail = detail


class MissingRuleError(FlexRulesError):
    """Raised when a dependency references a rule that was never registered."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} target `{name}' does not exist.")
        self.kind = kind
        self.name = name


__all__ = [
    "ConfigError",
    "FlexRulesError",
    "MissingRuleError",
    "RuleRegistrationError",
    "ToolNotFoundError",
    "VersionProbeError",
]
