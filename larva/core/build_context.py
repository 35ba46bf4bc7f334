# SPDX-License-Identifier: MIT
"""Build context shared by every build component.

A BuildContext bundles everything that used to be process-wide state:
the detected platform, the active build mode and the resolved output and
cache directories. It is immutable, so several builds can be set up side
by side within one process (the tests rely on this).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from larva.configure.platform import Platform, get_platform

if TYPE_CHECKING:
    from larva.core.config import Config, Target


class BuildMode(str, Enum):
    DEBUG = "debug"
    RELEASE = "release"


@dataclass(frozen=True)
class BuildContext:
    """Immutable per-invocation build settings.

    Attributes:
        config: The loaded project description.
        platform: Platform whose overlays are applied.
        mode: Debug or release.
        root_dir: Absolute project root.
        output_dir: Where the executable and copied assets go.
        cache_dir: Where object and dependency files go.
    """

    config: Config
    platform: Platform
    mode: BuildMode
    root_dir: Path
    output_dir: Path
    cache_dir: Path

    @classmethod
    def create(
        cls,
        config: Config,
        *,
        mode: BuildMode | str = BuildMode.DEBUG,
        platform: Platform | None = None,
        root_dir: Path | str | None = None,
    ) -> BuildContext:
        """Resolve directories for a config and return a new context.

        The output directory is taken from the executable target's overlay
        for the platform; without one, the project root is used. The cache
        directory defaults to the output directory.
        """
        platform = platform or get_platform()
        root = Path(root_dir).absolute() if root_dir else Path.cwd()

        output = ""
        exe = config.executable_target()
        if exe is not None:
            output = exe.overlay(platform.name).output
        output_dir = root / output if output else root

        cache = config.project.build_cache
        cache_dir = root / cache if cache else output_dir

        return cls(
            config=config,
            platform=platform,
            mode=BuildMode(mode),
            root_dir=root,
            output_dir=output_dir,
            cache_dir=cache_dir,
        )

    @property
    def exe_name(self) -> str:
        """Platform-appropriate file name of the linked executable."""
        return self.platform.exe_name(self.config.project.name)

    @property
    def exe_path(self) -> Path:
        return self.output_dir / self.exe_name

    def resolve(self, path: str | Path) -> Path:
        """Interpret a project-relative path."""
        return self.root_dir / path

    def relpath(self, path: Path) -> str:
        """Path as passed to tools, which run in the project root."""
        try:
            return path.relative_to(self.root_dir).as_posix()
        except ValueError:
            return str(path)

    def includes_for(self, target: Target) -> list[str]:
        """Target includes followed by the platform overlay's includes."""
        return list(target.includes) + list(target.overlay(self.platform.name).includes)
