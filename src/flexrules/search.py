# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem search for programs, libraries and header directories.

Each finder honours an explicit override first, the way a pre-seeded build
cache entry short-circuits searching, then walks caller hints, environment
derived directories, the prefixes of ``PATH`` entries and finally the
conventional system prefixes.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import sysconfig
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

SYSTEM_PREFIXES: Final[tuple[Path, ...]] = (Path("/usr/local"), Path("/usr"), Path("/"))
LIBRARY_ENV_VARS: Final[tuple[str, ...]] = ("LIBRARY_PATH",)
INCLUDE_ENV_VARS: Final[tuple[str, ...]] = ("CPATH", "C_INCLUDE_PATH", "CPLUS_INCLUDE_PATH")


def _split_env_paths(env: Mapping[str, str], names: Iterable[str]) -> list[Path]:
    paths: list[Path] = []
    for name in names:
        raw = env.get(name, "")
        paths.extend(Path(entry) for entry in raw.split(os.pathsep) if entry)
    return paths


def _unique(paths: Iterable[Path]) -> Iterator[Path]:
    seen: set[Path] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        yield path


def path_prefixes(env: Mapping[str, str]) -> list[Path]:
    """Return install prefixes implied by ``PATH`` entries ending in ``bin``."""

    prefixes: list[Path] = []
    for entry in _split_env_paths(env, ("PATH",)):
        if entry.name in {"bin", "sbin"}:
            prefixes.append(entry.parent)
    return prefixes


def library_file_names(name: str, *, platform: str | None = None) -> list[str]:
    """Return the candidate file names for library ``name`` on ``platform``."""

    platform = platform or sys.platform
    if platform.startswith("win"):
        return [f"{name}.lib", f"lib{name}.lib", f"lib{name}.a"]
    if platform == "darwin":
        return [f"lib{name}.dylib", f"lib{name}.tbd", f"lib{name}.a"]
    return [f"lib{name}.so", f"lib{name}.a"]


def _library_subdirs() -> list[str]:
    subdirs = ["lib", "lib64"]
    multiarch = sysconfig.get_config_var("MULTIARCH")
    if multiarch:
        subdirs.insert(1, f"lib/{multiarch}")
    return subdirs


def library_search_dirs(hints: Sequence[Path], env: Mapping[str, str]) -> list[Path]:
    """Return the ordered directories searched for libraries."""

    prefixes = [*path_prefixes(env), *SYSTEM_PREFIXES]
    derived = [prefix / subdir for prefix in prefixes for subdir in _library_subdirs()]
    return list(_unique([*hints, *_split_env_paths(env, LIBRARY_ENV_VARS), *derived]))


def include_search_dirs(hints: Sequence[Path], env: Mapping[str, str]) -> list[Path]:
    """Return the ordered directories searched for headers."""

    prefixes = [*path_prefixes(env), *SYSTEM_PREFIXES]
    derived = [prefix / "include" for prefix in prefixes]
    return list(_unique([*hints, *_split_env_paths(env, INCLUDE_ENV_VARS), *derived]))


def find_program(
    names: Sequence[str],
    *,
    hints: Sequence[Path] = (),
    override: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the first executable among ``names``, or ``None`` when absent.

    Args:
        names: Candidate program names, tried in order.
        hints: Directories searched before ``PATH``.
        override: Explicit program path or name that replaces searching.
        env: Environment providing ``PATH``; defaults to ``os.environ``.

    Returns:
        Path | None: Absolute path to the executable when found.
    """

    env = os.environ if env is None else env
    directories = [*hints, *_split_env_paths(env, ("PATH",))]
    search_path = os.pathsep.join(str(directory) for directory in _unique(directories))
    if override:
        resolved = shutil.which(str(override), path=search_path)
        LOGGER.debug("find_program override=%s -> %s", override, resolved)
        return Path(resolved).absolute() if resolved else None
    for name in names:
        resolved = shutil.which(name, path=search_path)
        if resolved:
            LOGGER.debug("find_program name=%s -> %s", name, resolved)
            return Path(resolved).absolute()
    LOGGER.debug("find_program names=%s -> not found", ",".join(names))
    return None


def find_library(
    names: Sequence[str],
    *,
    hints: Sequence[Path] = (),
    override: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path | None:
    """Return the first library file matching ``names``, or ``None`` when absent."""

    env = os.environ if env is None else env
    if override:
        candidate = Path(override)
        return candidate.absolute() if candidate.is_file() else None
    directories = library_search_dirs(hints, env)
    for name in names:
        for directory in directories:
            for file_name in library_file_names(name, platform=platform):
                candidate = directory / file_name
                if candidate.is_file():
                    LOGGER.debug("find_library name=%s -> %s", name, candidate)
                    return candidate.absolute()
    LOGGER.debug("find_library names=%s -> not found", ",".join(names))
    return None


def find_path(
    file_name: str,
    *,
    hints: Sequence[Path] = (),
    override: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the directory containing ``file_name``, or ``None`` when absent."""

    env = os.environ if env is None else env
    if override:
        candidate = Path(override)
        return candidate.absolute() if (candidate / file_name).is_file() else None
    for directory in include_search_dirs(hints, env):
        if (directory / file_name).is_file():
            LOGGER.debug("find_path file=%s -> %s", file_name, directory)
            return directory.absolute()
    LOGGER.debug("find_path file=%s -> not found", file_name)
    return None


__all__ = [
    "find_library",
    "find_path",
    "find_program",
    "include_search_dirs",
    "library_file_names",
    "library_search_dirs",
    "path_prefixes",
]
