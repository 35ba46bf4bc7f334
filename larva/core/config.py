# SPDX-License-Identifier: MIT
"""Immutable project model.

The model mirrors the layout of larva.toml: one Project, a mapping of
named Targets, a list of PostBuildSteps and a mapping of CustomCommands.
It is built once by the loader and never mutated afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from larva.configure.platform import Platform

logger = logging.getLogger(__name__)

TargetKind = Literal["executable", "object"]

TARGET_KINDS: tuple[str, ...] = ("executable", "object")

# Language tags starting with this prefix are compiled as C++.
CXX_PREFIX = "c++"


def is_cxx_language(language: str) -> bool:
    return language.startswith(CXX_PREFIX)


def _frozen(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Project:
    """Project-wide settings.

    Attributes:
        name: Project name, also the base name of the linked executable.
        build_cache: Directory for objects and dependency files. Falls back
            to the output directory when not set.
        compiler: Compiler family ("gcc" or "clang"); None means gcc.
        variables: User-defined placeholder values for `{name}` tokens.
    """

    name: str
    build_cache: str | None = None
    compiler: str | None = None
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", _frozen(self.variables))


@dataclass(frozen=True)
class PlatformOverlay:
    """Per-platform additions to a target."""

    includes: tuple[str, ...] = ()
    libdirs: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    output: str = ""


@dataclass(frozen=True)
class BuildModeFlags:
    """Compiler flags for one build mode."""

    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Target:
    """A named unit of compilation.

    Attributes:
        name: Key of the target in the project's target table.
        kind: "executable" or "object".
        language: Language tag such as "c99" or "c++20".
        sources: Glob patterns, expanded in order.
        includes: Include directories, before any platform additions.
        deps: Names of targets built before this one (one level only).
        platform: Overlays keyed by platform name ("windows", "linux").
        debug: Flags used for debug builds.
        release: Flags used for release builds.
    """

    name: str
    kind: TargetKind = "object"
    language: str = "c99"
    sources: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    deps: tuple[str, ...] = ()
    platform: Mapping[str, PlatformOverlay] = field(default_factory=dict)
    debug: BuildModeFlags = field(default_factory=BuildModeFlags)
    release: BuildModeFlags = field(default_factory=BuildModeFlags)

    def __post_init__(self) -> None:
        object.__setattr__(self, "platform", _frozen(self.platform))

    @property
    def is_executable(self) -> bool:
        return self.kind == "executable"

    def overlay(self, platform_name: str) -> PlatformOverlay:
        """Overlay for a platform, or an empty one if none is declared."""
        return self.platform.get(platform_name) or PlatformOverlay()

    def flags_for(self, mode: str) -> tuple[str, ...]:
        """Flags for the given build mode name."""
        return self.release.flags if mode == "release" else self.debug.flags


@dataclass(frozen=True)
class PostBuildStep:
    """Files to copy and an optional shell hook run after linking.

    The target association is informational only.
    """

    target: str = ""
    copy: tuple[str, ...] = ()
    run_linux: str = ""
    run_windows: str = ""

    def command_for(self, platform: Platform) -> str:
        return self.run_windows if platform.is_windows else self.run_linux


@dataclass(frozen=True)
class CustomCommand:
    """A named command made of ordered steps.

    Steps are "build", "post_build" or "exec:<path template>". The
    `remove` list is only honoured by the built-in clean command.
    """

    name: str
    description: str = ""
    steps: tuple[str, ...] = ()
    remove: tuple[str, ...] = ()


@dataclass(frozen=True)
class Config:
    """The complete, fully typed project description."""

    project: Project
    targets: Mapping[str, Target] = field(default_factory=dict)
    post_build: tuple[PostBuildStep, ...] = ()
    commands: Mapping[str, CustomCommand] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", _frozen(self.targets))
        object.__setattr__(self, "commands", _frozen(self.commands))

    def executable_target(self) -> Target | None:
        """Return the executable target, or None if the project has none.

        If several targets are executables the first declared one wins.
        """
        executables = [t for t in self.targets.values() if t.is_executable]
        if not executables:
            return None
        if len(executables) > 1:
            logger.warning(
                "Multiple executable targets (%s); using '%s'",
                ", ".join(t.name for t in executables),
                executables[0].name,
            )
        return executables[0]
