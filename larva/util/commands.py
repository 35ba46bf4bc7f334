# SPDX-License-Identifier: MIT
"""Running external tools and copying files.

Every external command goes through a CommandRunner. The runner echoes
the command line, lets the child share the terminal (stdin, stdout and
stderr are inherited) and raises as soon as a command fails, which stops
the build before any later command is issued.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from larva.core.errors import CommandError, ToolNotFoundError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands in the foreground."""

    def format_command(self, executable: str, args: Sequence[str]) -> str:
        return " ".join([executable, *args])

    def echo(self, executable: str, args: Sequence[str]) -> None:
        print(f"  {self.format_command(executable, args)}", flush=True)

    def run(
        self,
        executable: str,
        *args: str,
        cwd: Path | None = None,
    ) -> None:
        """Run a command and wait for it.

        Raises:
            ToolNotFoundError: The executable could not be started.
            CommandError: The command exited with a non-zero status.
        """
        command = [executable, *args]
        self.echo(executable, args)
        logger.debug("cwd=%s", cwd)
        try:
            result = subprocess.run(command, cwd=cwd)
        except OSError as e:
            raise ToolNotFoundError(command, e.strerror or str(e)) from e
        if result.returncode != 0:
            raise CommandError(command, result.returncode)


def copy(src: str | Path, dest: str | Path) -> None:
    """Copy a file with its timestamps, creating parent directories as needed."""
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
