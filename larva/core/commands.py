# SPDX-License-Identifier: MIT
"""Project-level commands: play, clean and `[commands]` entries.

Custom command steps:
    build        full build (compile, link, post-build)
    post_build   post-build pipeline only
    exec:<path>  run <path> (after variable expansion) in the output
                 directory, sharing the terminal
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from larva.core.driver import BuildDriver
from larva.core.errors import CommandError, FileOperationError, ToolNotFoundError
from larva.core.post_build import PostBuildPipeline
from larva.core.subst import Expander

if TYPE_CHECKING:
    from larva.core.build_context import BuildContext
    from larva.core.config import CustomCommand
    from larva.util.commands import CommandRunner

logger = logging.getLogger(__name__)

EXEC_PREFIX = "exec:"
CLEAN = "clean"


class CommandExecutor:
    """Runs named project commands within one BuildContext."""

    def __init__(self, ctx: BuildContext, runner: CommandRunner) -> None:
        self.ctx = ctx
        self.runner = runner
        self.expander = Expander.from_context(ctx)

    def build(self) -> None:
        BuildDriver(self.ctx, self.runner).build_all()

    def post_build(self) -> None:
        PostBuildPipeline(self.ctx, self.runner).run()

    def play(self) -> None:
        """Build, then run the executable from the output directory.

        The game's own exit status is reported but never fails the command;
        an executable that cannot be started still does.
        """
        self.build()
        exe = self.ctx.exe_path
        print(f"  running {self.ctx.relpath(exe)}")
        try:
            self.runner.run(str(exe), cwd=self.ctx.output_dir)
        except ToolNotFoundError:
            raise
        except CommandError as e:
            logger.warning("%s exited with code %d", self.ctx.exe_name, e.returncode)

    def exec_path(self, template: str) -> None:
        """Run an `exec:` step.

        A bare program name is looked up on PATH; anything with a directory
        part is relative to the project root.
        """
        path = self.expander.expand(template).strip()
        if "/" in path or "\\" in path:
            path = str(self.ctx.resolve(path))
        self.runner.run(path, cwd=self.ctx.output_dir)

    def clean(self) -> None:
        """Remove the directories listed by `[commands.clean].remove`.

        Every directory is attempted; failures are raised together at the end.
        """
        command = self.ctx.config.commands.get(CLEAN)
        failures: list[tuple[str, str]] = []
        if command is not None:
            for directory in command.remove:
                path = self.ctx.resolve(directory)
                try:
                    shutil.rmtree(path)
                except FileNotFoundError:
                    pass
                except OSError as e:
                    logger.error("failed to remove %s: %s", directory, e)
                    failures.append((directory, e.strerror or str(e)))
                    continue
                print(f"  removed {directory}")
        if failures:
            raise FileOperationError("remove", failures)
        print("Cleaned.")

    def run_custom(self, command: CustomCommand) -> None:
        """Run the steps of a custom command in order."""
        logger.info("Running command '%s'", command.name)
        for step in command.steps:
            if step == "build":
                self.build()
            elif step == "post_build":
                self.post_build()
            elif step.startswith(EXEC_PREFIX):
                self.exec_path(step[len(EXEC_PREFIX) :])
            else:
                logger.warning(
                    "command '%s': unknown step '%s' ignored", command.name, step
                )
