# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models describing the located tool and declared generation rules."""

from __future__ import annotations

from pathlib import Path
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HEADER_FLAG_PREFIX: Final[str] = "--header-file="
OUTPUT_FLAG_PREFIX: Final[str] = "-o"

PublishedValue: TypeAlias = bool | str | list[str]


class ToolLocation(BaseModel):
    """Filesystem locations discovered for flex and its optional runtime pieces."""

    model_config = ConfigDict(frozen=True)

    executable: Path | None = None
    library: Path | None = None
    include_dir: Path | None = None


class VersionProbe(BaseModel):
    """Outcome of running ``<executable> --version`` once."""

    model_config = ConfigDict(frozen=True)

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    version: str = ""

    @property
    def ok(self) -> bool:
        """Return ``True`` when the probe exited successfully."""

        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Return the failure text including both output streams verbatim."""

        joined = " ".join(self.command)
        return f'Command "{joined}" failed with output:\n{self.stdout}\n{self.stderr}'


class FlexPackage(BaseModel):
    """Tool-wide state published once the locator has run."""

    model_config = ConfigDict(frozen=True)

    found: bool
    location: ToolLocation = Field(default_factory=ToolLocation)
    version: str = ""
    probe: VersionProbe | None = None
    notes: tuple[str, ...] = ()

    @property
    def executable(self) -> Path | None:
        return self.location.executable

    @property
    def libraries(self) -> list[Path]:
        return [self.location.library] if self.location.library else []

    @property
    def include_dirs(self) -> list[Path]:
        return [self.location.include_dir] if self.location.include_dir else []

    def variables(self) -> dict[str, PublishedValue]:
        """Return the tool-wide state under its conventional ``FLEX_*`` names."""

        return {
            "FLEX_FOUND": self.found,
            "FLEX_EXECUTABLE": str(self.executable) if self.executable else "",
            "FLEX_VERSION": self.version,
            "FLEX_LIBRARIES": [str(path) for path in self.libraries],
            "FLEX_INCLUDE_DIRS": [str(path) for path in self.include_dirs],
        }


class FlexTargetOptions(BaseModel):
    """Optional settings accepted when declaring a flex generation rule.

    Unknown keys are rejected so a misspelt option never silently drops out
    of the generated command line.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    compile_flags: str | None = None
    defines_file: Path | None = None

    @field_validator("compile_flags", "defines_file", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CustomCommand(BaseModel):
    """External build step declared for a scheduler to run later."""

    model_config = ConfigDict(frozen=True)

    outputs: tuple[Path, ...]
    command: tuple[str, ...]
    depends: tuple[Path, ...] = ()
    working_directory: Path
    comment: str = ""
    verbatim: bool = True


class GenerationRule(BaseModel):
    """Named association between a flex input and the files it generates."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    input: Path
    outputs: tuple[Path, ...] = Field(min_length=1)
    compile_flags: tuple[str, ...] = ()
    output_header: Path | None = None
    command: CustomCommand
    defined: bool = True

    @property
    def output(self) -> Path:
        """Return the primary generated source file."""

        return self.outputs[0]

    @model_validator(mode="after")
    def _header_flag_is_last(self) -> GenerationRule:
        if self.output_header is None:
            if len(self.outputs) != 1:
                raise ValueError("extra outputs require an output header")
            return self
        expected = f"{HEADER_FLAG_PREFIX}{self.output_header}"
        if not self.compile_flags or self.compile_flags[-1] != expected:
            raise ValueError(f"header emission flag must be the last flag: {expected}")
        if self.outputs[1:] != (self.output_header,):
            raise ValueError("output header must follow the primary output")
        return self

    def variables(self) -> dict[str, PublishedValue]:
        """Return the rule's state under ``FLEX_<name>_*`` names."""

        prefix = f"FLEX_{self.name}_"
        return {
            f"{prefix}DEFINED": self.defined,
            f"{prefix}OUTPUTS": [str(path) for path in self.outputs],
            f"{prefix}INPUT": str(self.input),
            f"{prefix}COMPILE_FLAGS": list(self.compile_flags),
            f"{prefix}OUTPUT_HEADER": str(self.output_header) if self.output_header else "",
        }


class ParserRule(BaseModel):
    """Companion parser-generator rule exposing the header its scanner needs."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    output_header: Path | None = None
    outputs: tuple[Path, ...] = ()


class SourceFileProperties(BaseModel):
    """Per-source metadata consumed when compiling generated files."""

    model_config = ConfigDict(validate_assignment=True)

    path: Path
    object_depends: list[Path] = Field(default_factory=list)

    def add_object_depends(self, dependency: Path) -> None:
        if dependency not in self.object_depends:
            self.object_depends = [*self.object_depends, dependency]


__all__ = [
    "HEADER_FLAG_PREFIX",
    "OUTPUT_FLAG_PREFIX",
    "CustomCommand",
    "FlexPackage",
    "FlexTargetOptions",
    "GenerationRule",
    "ParserRule",
    "PublishedValue",
    "SourceFileProperties",
    "ToolLocation",
    "VersionProbe",
]
