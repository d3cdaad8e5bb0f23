# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover the flex executable, its runtime library, headers and version."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import LocatorConfig, load_config
from .errors import ToolNotFoundError, VersionProbeError
from .logging import PACKAGE_NAME, report_found, report_not_found, report_probe_failure, version_request
from .models import FlexPackage, ToolLocation, VersionProbe
from .process import capture_output
from .search import find_library, find_path, find_program
from .versioning import extract_flex_version, is_compatible

LOGGER = logging.getLogger(__name__)

VERSION_FLAG = "--version"


def probe_version(executable: Path, *, timeout: float | None = None) -> VersionProbe:
    """Run ``<executable> --version`` once and parse the reported version.

    The probe never raises for a failing tool: a non-zero exit, a timeout or
    a launch error is reported through the returned :class:`VersionProbe`
    with an empty version.

    Args:
        executable: Absolute path to the flex executable.
        timeout: Optional timeout in seconds.

    Returns:
        VersionProbe: Exit status, both output streams and the parsed version.
    """

    command = (str(executable), VERSION_FLAG)
    completed = capture_output(command, timeout=timeout)
    stdout = completed.stdout.rstrip()
    stderr = completed.stderr.rstrip()
    version = extract_flex_version(stdout, executable) if completed.returncode == 0 else ""
    LOGGER.debug("version probe %s exited %s -> %r", executable, completed.returncode, version)
    return VersionProbe(
        command=command,
        returncode=completed.returncode,
        stdout=stdout,
        stderr=stderr,
        version=version,
    )


def handle_standard_args(
    location: ToolLocation,
    version: str,
    config: LocatorConfig,
    *,
    probe: VersionProbe | None = None,
    use_emoji: bool = True,
) -> FlexPackage:
    """Decide whether flex counts as found and report the outcome.

    Args:
        location: Discovered filesystem locations.
        version: Parsed version, empty when unknown.
        config: Locator settings carrying the version request and severity.
        probe: Version probe result attached to the package.
        use_emoji: Whether console messages may include emoji.

    Returns:
        FlexPackage: Published tool-wide state.

    Raises:
        ToolNotFoundError: When flex is missing or unsuitable and ``config.required`` is set.
    """

    failure: str | None = None
    notes: list[str] = []
    request = version_request(config.min_version, exact=config.exact) if config.min_version else ""
    if location.executable is None:
        failure = f"Could NOT find {PACKAGE_NAME} (missing: FLEX_EXECUTABLE)"
        if request:
            failure = f"{failure} {request}"
    elif config.min_version:
        if not version:
            notes.append(f"Version of {location.executable} could not be determined {request}")
        elif not is_compatible(version, config.min_version, exact=config.exact):
            kind = "exact version" if config.exact else "at least"
            failure = (
                f'Could NOT find {PACKAGE_NAME}: Found unsuitable version "{version}", '
                f'but required is {kind} "{config.min_version}" (found {location.executable})'
            )

    if failure is not None:
        if config.required:
            raise ToolNotFoundError(failure)
        package = FlexPackage(found=False, location=location, version=version, probe=probe, notes=(failure,))
        if not config.quiet:
            report_not_found(package, use_emoji=use_emoji)
        return package

    package = FlexPackage(found=True, location=location, version=version, probe=probe, notes=tuple(notes))
    if not config.quiet:
        report_found(package, config.min_version, exact=config.exact, use_emoji=use_emoji)
    return package


class Locator:
    """Discover flex once and cache the published :class:`FlexPackage`."""

    def __init__(
        self,
        config: LocatorConfig | None = None,
        *,
        env: Mapping[str, str] | None = None,
        use_emoji: bool = True,
    ) -> None:
        self._config = config or LocatorConfig()
        self._env = env
        self._use_emoji = use_emoji
        self._package: FlexPackage | None = None

    @property
    def config(self) -> LocatorConfig:
        return self._config

    def locate(self) -> FlexPackage:
        """Return the discovered package, running discovery on first use.

        Raises:
            ToolNotFoundError: When flex is required but missing or unsuitable.
            VersionProbeError: When flex is required and ``--version`` fails.
        """

        if self._package is None:
            self._package = self._discover()
        return self._package

    def find_location(self) -> ToolLocation:
        """Search the filesystem for the executable, library and header directory."""

        cfg = self._config
        return ToolLocation(
            executable=find_program(cfg.executable_names, hints=cfg.hints, override=cfg.executable, env=self._env),
            library=find_library(cfg.library_names, hints=cfg.hints, override=cfg.library, env=self._env),
            include_dir=find_path(cfg.header_name, hints=cfg.hints, override=cfg.include_dir, env=self._env),
        )

    def _discover(self) -> FlexPackage:
        cfg = self._config
        location = self.find_location()
        probe: VersionProbe | None = None
        version = ""
        if location.executable is not None:
            probe = probe_version(location.executable, timeout=cfg.probe_timeout)
            if not probe.ok:
                if cfg.required:
                    raise VersionProbeError(probe)
                report_probe_failure(probe, use_emoji=self._use_emoji)
            version = probe.version
        return handle_standard_args(location, version, cfg, probe=probe, use_emoji=self._use_emoji)


def find_flex(
    config: LocatorConfig | None = None,
    *,
    root: Path | None = None,
    env: Mapping[str, str] | None = None,
    use_emoji: bool = True,
    **overrides: Any,
) -> FlexPackage:
    """Locate flex in one call.

    When ``config`` is omitted it is loaded from ``root``'s ``pyproject.toml``
    and the environment, with ``overrides`` (for example ``required=True`` or
    ``min_version="2.6"``) applied last.
    """

    if config is None:
        config = load_config(root, env=env, overrides=overrides)
    elif overrides:
        config = LocatorConfig.model_validate({**config.model_dump(), **overrides})
    return Locator(config, env=env, use_emoji=use_emoji).locate()


__all__ = ["Locator", "find_flex", "handle_standard_args", "probe_version"]
