# SPDX-License-Identifier: MIT
"""Build the executable target, its dependencies, and link.

The dependency model is flat: only the executable's direct `deps` are
built, in the order listed, before the executable itself. Dependencies of
dependencies are not followed and no cycle check is made.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from larva.core.errors import FileOperationError
from larva.core.post_build import PostBuildPipeline
from larva.core.target_builder import TargetBuilder

if TYPE_CHECKING:
    from larva.core.build_context import BuildContext
    from larva.core.config import Target
    from larva.util.commands import CommandRunner

logger = logging.getLogger(__name__)


class BuildDriver:
    """Runs a full build for a BuildContext."""

    def __init__(self, ctx: BuildContext, runner: CommandRunner) -> None:
        self.ctx = ctx
        self.runner = runner
        self.builder = TargetBuilder(ctx, runner)

    def ensure_dirs(self) -> None:
        """Create the output and cache directories if missing."""
        for directory in (self.ctx.output_dir, self.ctx.cache_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileOperationError(
                    "create directory", [(str(directory), e.strerror or str(e))]
                ) from e

    def build_all(self) -> None:
        """Compile, link and run the post-build pipeline.

        Without an executable target nothing is compiled or linked, but the
        post-build pipeline still runs.
        """
        self.ensure_dirs()

        exe = self.ctx.config.executable_target()
        if exe is not None:
            objects: list[str] = []
            for dep_name in exe.deps:
                dep = self.ctx.config.targets.get(dep_name)
                if dep is None:
                    logger.warning(
                        "target '%s' depends on unknown target '%s'",
                        exe.name,
                        dep_name,
                    )
                    continue
                objects.extend(self.builder.build(dep))
            objects.extend(self.builder.build(exe))
            self.link(exe, objects)
        else:
            logger.info("no executable target; skipping compile and link")

        PostBuildPipeline(self.ctx, self.runner).run()

    def link(self, exe: Target, objects: list[str]) -> None:
        """Link objects into the project executable.

        Runs on every build, even when no object changed.
        """
        overlay = exe.overlay(self.ctx.platform.name)
        command = self.builder.toolchain.link_command(
            exe.language,
            objects,
            self.ctx.relpath(self.ctx.exe_path),
            libdirs=overlay.libdirs,
            libs=overlay.links,
        )
        self.runner.run(command[0], *command[1:], cwd=self.ctx.root_dir)
