# SPDX-License-Identifier: MIT
"""Post-build steps: copy assets into the output directory and run hooks."""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from larva.core.errors import FileOperationError
from larva.core.staleness import needs_copy
from larva.core.subst import Expander
from larva.util.commands import copy

if TYPE_CHECKING:
    from larva.core.build_context import BuildContext
    from larva.core.config import PostBuildStep
    from larva.util.commands import CommandRunner

logger = logging.getLogger(__name__)


class PostBuildPipeline:
    """Runs every `[[post_build]]` step of the project in order."""

    def __init__(self, ctx: BuildContext, runner: CommandRunner) -> None:
        self.ctx = ctx
        self.runner = runner
        self.expander = Expander.from_context(ctx)

    def run(self) -> None:
        """Run all steps.

        Copy failures do not stop the pipeline: every file, hook and step is
        still attempted, and one FileOperationError listing all failed copies
        is raised at the end. A failing hook raises CommandError at once.
        """
        failures: list[tuple[str, str]] = []
        for step in self.ctx.config.post_build:
            self.run_step(step, failures)
        if failures:
            raise FileOperationError("copy", failures)

    def run_step(self, step: PostBuildStep, failures: list[tuple[str, str]]) -> None:
        """Copy the step's files, then run its hook for this platform."""
        for pattern in step.copy:
            self.copy_pattern(pattern, failures)

        template = step.command_for(self.ctx.platform)
        if template:
            self.run_hook(template)

    def copy_pattern(self, pattern: str, failures: list[tuple[str, str]]) -> int:
        """Copy changed files matching a glob to the output directory.

        Files land directly under the output directory by base name.
        Returns the number of files copied.
        """
        matches = sorted(glob.glob(pattern, root_dir=self.ctx.root_dir, recursive=True))
        copied = 0
        for match in matches:
            src = self.ctx.resolve(match)
            if src.is_dir():
                continue
            dest = self.ctx.output_dir / Path(match).name
            if not needs_copy(src, dest):
                continue
            try:
                copy(src, dest)
            except OSError as e:
                logger.error("failed to copy %s: %s", match, e)
                failures.append((match, e.strerror or str(e)))
                continue
            copied += 1
        if copied > 0:
            print(f"  copied {copied} file(s) matching {pattern}")
        return copied

    def run_hook(self, template: str) -> None:
        """Expand and run a hook command.

        The command is split on whitespace; arguments cannot contain spaces.
        """
        parts = self.expander.expand(template).split()
        if not parts:
            return
        self.runner.run(parts[0], *parts[1:], cwd=self.ctx.root_dir)
