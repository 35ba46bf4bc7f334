# SPDX-License-Identifier: MIT
"""Compile one target's sources into object files.

For each target the builder expands the source globs, merges the include
directories of the target and its platform overlay, picks the flag set
of the active build mode and compiles every source whose object is stale.
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from larva.core.staleness import needs_rebuild
from larva.core.subst import Expander
from larva.toolchains import find_toolchain

if TYPE_CHECKING:
    from larva.core.build_context import BuildContext
    from larva.core.config import Target
    from larva.toolchains.toolchain import BaseToolchain
    from larva.util.commands import CommandRunner

logger = logging.getLogger(__name__)


class TargetBuilder:
    """Builds targets within one BuildContext.

    Example:
        builder = TargetBuilder(ctx, CommandRunner())
        objects = builder.build(ctx.config.targets["engine"])
    """

    def __init__(
        self,
        ctx: BuildContext,
        runner: CommandRunner,
        toolchain: BaseToolchain | None = None,
    ) -> None:
        self.ctx = ctx
        self.runner = runner
        self.toolchain = toolchain or find_toolchain(ctx.config.project.compiler)
        self.expander = Expander.from_context(ctx)

    def resolve_sources(self, target: Target) -> list[str]:
        """Expand source globs relative to the project root, in pattern order.

        Patterns that match nothing are ignored. Matches of one pattern are
        sorted so the order is stable across runs.
        """
        sources: list[str] = []
        for pattern in target.sources:
            matches = glob.glob(pattern, root_dir=self.ctx.root_dir, recursive=True)
            sources.extend(Path(m).as_posix() for m in sorted(matches))
        return sources

    def object_paths(self, target: Target, source: str) -> tuple[Path, Path]:
        """Object and dependency file paths for a source.

        The language suffix is stripped from the base name; a source with a
        different suffix keeps it (e.g. "x.cc" -> "x.cc.o" in a C++ target).
        """
        base = Path(source).name
        suffix = self.toolchain.source_suffix(target.language)
        if base.endswith(suffix):
            base = base[: -len(suffix)]
        platform = self.ctx.platform
        cache = self.ctx.cache_dir
        return (
            cache / (base + platform.object_suffix),
            cache / (base + platform.depfile_suffix),
        )

    def build(self, target: Target) -> list[str]:
        """Compile the target's stale sources.

        Returns:
            Object paths (as passed to the tools) in source order. Empty if
            the target has no sources.

        Raises:
            CommandError: A compiler invocation failed.
        """
        sources = self.resolve_sources(target)
        if not sources:
            logger.warning("no sources found for target '%s'", target.name)
            return []

        includes = self.ctx.includes_for(target)
        flags = self.expander.expand_all(target.flags_for(self.ctx.mode.value))

        objects: list[str] = []
        seen: dict[Path, str] = {}
        for source in sources:
            obj, depfile = self.object_paths(target, source)
            if obj in seen:
                logger.warning(
                    "target '%s': %s and %s both compile to %s",
                    target.name,
                    seen[obj],
                    source,
                    self.ctx.relpath(obj),
                )
            seen[obj] = source

            if needs_rebuild(
                self.ctx.resolve(source), obj, depfile, base_dir=self.ctx.root_dir
            ):
                command = self.toolchain.compile_command(
                    target.language,
                    source,
                    self.ctx.relpath(obj),
                    self.ctx.relpath(depfile),
                    flags=flags,
                    includes=includes,
                )
                self.runner.run(command[0], *command[1:], cwd=self.ctx.root_dir)
            else:
                print(f"  skip {Path(source).name} (unchanged)")
            objects.append(self.ctx.relpath(obj))
        return objects
