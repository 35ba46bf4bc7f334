# SPDX-License-Identifier: MIT
"""Shared fixtures for larva tests."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from larva.configure.platform import Platform
from larva.core.build_context import BuildContext, BuildMode
from larva.core.config import Config
from larva.core.errors import CommandError
from larva.util.commands import CommandRunner

# An mtime well in the past, used for inputs so that anything the fake
# compiler writes is strictly newer.
OLD_TIME = 1_000_000_000


def write(path: Path, text: str = "", mtime: float | None = OLD_TIME) -> Path:
    """Create a file (and its parents) with a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def touch(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


class RecordingRunner(CommandRunner):
    """Records commands and simulates a gcc-style compiler and linker.

    Compile commands (containing -c) write the object named by -o and a
    dependency file named by -MF listing the source plus any headers
    registered in `headers`. Other commands with -o write the output file.

    Attributes:
        commands: Every command run, executable first.
        cwds: Working directory of each command.
        headers: Source path -> header paths to record in its depfile.
        fail_on: Command fails when any of its tokens is in this set.
    """

    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.headers: dict[str, list[str]] = {}
        self.fail_on: set[str] = set()

    def run(self, executable: str, *args: str, cwd: Path | None = None) -> None:
        command = [executable, *args]
        self.commands.append(command)
        self.cwds.append(cwd)
        if self.fail_on.intersection(command):
            raise CommandError(command, 1)

        base = cwd or Path.cwd()
        if "-c" in args:
            obj = args[args.index("-o") + 1]
            depfile = args[args.index("-MF") + 1]
            source = args[args.index("-o") - 1]
            (base / obj).parent.mkdir(parents=True, exist_ok=True)
            (base / obj).write_text(f"object for {source}\n")
            deps = [source, *self.headers.get(source, [])]
            (base / depfile).write_text(f"{obj}: " + " \\\n  ".join(deps) + "\n")
        elif "-o" in args:
            out = base / args[args.index("-o") + 1]
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text("linked\n")

    @property
    def compiles(self) -> list[list[str]]:
        return [c for c in self.commands if "-c" in c]

    @property
    def links(self) -> list[list[str]]:
        return [c for c in self.commands if "-c" not in c and "-o" in c]

    def compiled_sources(self) -> list[str]:
        return [c[c.index("-o") - 1] for c in self.compiles]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def linux() -> Platform:
    return Platform("linux")


@pytest.fixture
def make_context(tmp_path: Path, linux: Platform):
    """Factory for BuildContexts rooted at tmp_path on the linux platform."""

    def _make(
        config: Config,
        mode: BuildMode | str = BuildMode.DEBUG,
        platform: Platform | None = None,
    ) -> BuildContext:
        return BuildContext.create(
            config, mode=mode, platform=platform or linux, root_dir=tmp_path
        )

    return _make


def args_after(command: Sequence[str], flag: str) -> str:
    return command[list(command).index(flag) + 1]
